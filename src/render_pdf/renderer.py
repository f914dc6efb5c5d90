from __future__ import annotations

import logging
import math

from PIL import Image

from contracts.errors import ConfigurationError, LiveTextError, RenderError

from .engines.base import PdfPageHandle
from .raster import RasterImage

logger = logging.getLogger(__name__)

DEFAULT_RATIO = 2.0

_WHITE = (255, 255, 255)


def raster_size(*, width: float, height: float, ratio: float) -> tuple[int, int]:
    """
    Pixel dimensions for a boundary of (width, height) document units at `ratio`:
    ceil(dimension * ratio), never below 1.
    """

    return max(1, math.ceil(width * ratio)), max(1, math.ceil(height * ratio))


def render_page(page: PdfPageHandle, *, ratio: float = DEFAULT_RATIO, page_num: int | None = None) -> RasterImage:
    """
    Render one page onto an opaque white RGB raster.

    The canvas is sized from the page boundary and the page is drawn with the
    same scale factor, so document coordinates land 1:1 on canvas pixels.
    """

    if not math.isfinite(ratio) or ratio <= 0:
        raise ConfigurationError(f"ratio must be > 0, got {ratio!r}", code="CONFIG_BAD_RATIO")

    try:
        box_w, box_h = page.boundary()
    except LiveTextError:
        raise
    except Exception as e:
        raise RenderError(
            f"Failed to read page boundary: {page_num}",
            code="RENDER_BOUNDARY_FAILED",
            detail={"page_num": page_num, "error": repr(e)},
        ) from e

    width, height = raster_size(width=box_w, height=box_h, ratio=ratio)

    try:
        canvas = Image.new("RGB", (width, height), _WHITE)
    except (MemoryError, ValueError) as e:
        raise RenderError(
            f"Failed to allocate {width}x{height} raster",
            code="RENDER_ALLOC_FAILED",
            detail={"page_num": page_num, "width": width, "height": height, "error": repr(e)},
        ) from e

    try:
        page.draw(canvas=canvas, scale=ratio)
    except LiveTextError:
        canvas.close()
        raise
    except Exception as e:
        canvas.close()
        raise RenderError(
            f"Failed to draw page: {page_num}",
            code="RENDER_DRAW_FAILED",
            detail={"page_num": page_num, "error": repr(e)},
        ) from e

    logger.debug("rendered page %s at ratio %s -> %dx%d", page_num, ratio, width, height)
    return RasterImage(image=canvas)
