from __future__ import annotations

import logging

from contracts.errors import LiveTextError, OcrError
from contracts.page import Item, Rect

from render_pdf.raster import RasterImage

from .contracts import NormalizedBox, OcrConfig
from .engines.base import RegionOcrEngine, TranscriptOcrEngine

logger = logging.getLogger(__name__)


def normalized_to_pixel_rect(box: NormalizedBox, *, width: int, height: int) -> Rect:
    """
    Convert an engine box (unit square, origin bottom-left) into a pixel
    rectangle with origin top-left on a `width` x `height` raster.
    """

    return Rect(
        x=box.x * width,
        y=height - (box.max_y * height),
        width=box.width * width,
        height=box.height * height,
    )


def extract_regions(*, engine: RegionOcrEngine, config: OcrConfig, raster: RasterImage) -> list[Item]:
    """
    Run region recognition once and collapse every region to its top-1 candidate.

    Items keep engine order. A candidate whose geometry cannot be resolved
    still yields an Item, with `rect=None`.
    """

    try:
        regions = engine.recognize_regions(config=config, image=raster.image)
    except LiveTextError:
        raise
    except Exception as e:
        raise OcrError(
            "Region recognition failed",
            code="OCR_BACKEND_ERROR",
            detail={"error": repr(e)},
        ) from e

    items: list[Item] = []
    for region in regions:
        candidate = region.top_candidate()
        if candidate is None:
            continue

        rect: Rect | None = None
        try:
            box = candidate.bounding_box()
        except ValueError as e:
            logger.debug("dropping geometry for %r: %s", candidate.text, e)
            box = None
        if box is not None:
            rect = normalized_to_pixel_rect(box, width=raster.width, height=raster.height)

        items.append(Item(text=candidate.text, rect=rect))
    return items


def extract_transcript(*, engine: TranscriptOcrEngine, config: OcrConfig, raster: RasterImage) -> str:
    try:
        return engine.transcribe(config=config, image=raster.image)
    except LiveTextError:
        raise
    except Exception as e:
        raise OcrError(
            "Transcript recognition failed",
            code="OCR_BACKEND_ERROR",
            detail={"error": repr(e)},
        ) from e
