from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image


class PdfPageHandle(ABC):
    """
    One page of an opened document.

    Pages expose only what rasterization needs: the boundary rectangle in
    document units and a "draw into canvas at scale" capability.
    """

    @abstractmethod
    def boundary(self) -> tuple[float, float]:
        """Return (width, height) of the page boundary in document units."""

        raise NotImplementedError

    @abstractmethod
    def draw(self, *, canvas: Image.Image, scale: float) -> None:
        """
        Draw the page onto `canvas` (already sized and filled) so that one
        document unit maps onto `scale` pixels, origin top-left.
        """

        raise NotImplementedError

    def close(self) -> None:
        return None


class PdfDocumentHandle(ABC):
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_page(self, page_num: int) -> PdfPageHandle:
        """`page_num` is 1-indexed."""

        raise NotImplementedError

    def close(self) -> None:
        return None

    def __enter__(self) -> "PdfDocumentHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PdfRenderEngine(ABC):
    """
    Document parsing backend abstraction.

    Engines must perform NO OCR or text extraction; they only open documents
    and draw pages.
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def open_document(self, *, pdf_file: Path) -> PdfDocumentHandle:
        raise NotImplementedError
