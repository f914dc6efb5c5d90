from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PIL import Image

from contracts.errors import RenderError, ResourceInitError

from .base import PdfDocumentHandle, PdfPageHandle, PdfRenderEngine

logger = logging.getLogger(__name__)

_WHITE_RGBA = (255, 255, 255, 255)


def _require_pdfium():
    try:
        import pypdfium2 as pdfium  # type: ignore

        return pdfium
    except ImportError as e:
        raise ResourceInitError(
            "Missing dependency: pypdfium2 is required for PDF rendering.",
            code="RESOURCE_PDFIUM_MISSING",
        ) from e


class Pypdfium2Page(PdfPageHandle):
    def __init__(self, page: Any, *, page_num: int) -> None:
        self._page = page
        self._page_num = page_num

    def boundary(self) -> tuple[float, float]:
        # PDF media box, in points (1/72 inch)
        left, bottom, right, top = self._page.get_mediabox()
        return float(right - left), float(top - bottom)

    def draw(self, *, canvas: Image.Image, scale: float) -> None:
        try:
            media_left, _, _, media_top = self._page.get_mediabox()
            crop_left, _, _, crop_top = self._page.get_cropbox()
            # Undo /Rotate so the bitmap keeps the media box orientation.
            rotation = (360 - self._page.get_rotation()) % 360
            bitmap = self._page.render(scale=scale, rotation=rotation, fill_color=_WHITE_RGBA)
        except Exception as e:
            raise RenderError(
                f"Failed to draw page: {self._page_num}",
                code="RENDER_DRAW_FAILED",
                detail={"page_num": self._page_num, "error": repr(e)},
            ) from e

        try:
            rendered = bitmap.to_pil()
            if rendered.mode != canvas.mode:
                rendered = rendered.convert(canvas.mode)
            # pdfium draws only the crop box; place it where it sits inside the media box.
            # Pillow clips anything pasted past the canvas edge.
            offset = (round((crop_left - media_left) * scale), round((media_top - crop_top) * scale))
            canvas.paste(rendered, offset)
        finally:
            bitmap.close()

    def close(self) -> None:
        self._page.close()


class Pypdfium2Document(PdfDocumentHandle):
    def __init__(self, doc: Any) -> None:
        self._doc = doc

    def page_count(self) -> int:
        return len(self._doc)

    def get_page(self, page_num: int) -> PdfPageHandle:
        count = len(self._doc)
        if page_num < 1 or page_num > count:
            raise RenderError(
                f"Failed to get page: {page_num}",
                code="RENDER_PAGE_OUT_OF_RANGE",
                detail={"page_num": page_num, "page_count": count},
            )
        try:
            page = self._doc[page_num - 1]
        except Exception as e:
            raise RenderError(
                f"Failed to get page: {page_num}",
                code="RENDER_PAGE_LOAD_FAILED",
                detail={"page_num": page_num, "error": repr(e)},
            ) from e
        return Pypdfium2Page(page, page_num=page_num)

    def close(self) -> None:
        self._doc.close()


class Pypdfium2Engine(PdfRenderEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore
        except ImportError:
            return None
        return getattr(pdfium, "__version__", None)

    def open_document(self, *, pdf_file: Path) -> PdfDocumentHandle:
        pdfium = _require_pdfium()
        try:
            doc = pdfium.PdfDocument(str(pdf_file))
        except Exception as e:
            raise ResourceInitError(
                f"Failed to open PDF document: {pdf_file}",
                code="RESOURCE_DOCUMENT_OPEN_FAILED",
                detail={"pdf_file": str(pdf_file), "error": repr(e)},
            ) from e
        logger.debug("opened %s with %s (%d pages)", pdf_file, self.backend_id(), len(doc))
        return Pypdfium2Document(doc)
