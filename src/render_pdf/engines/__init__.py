from .base import PdfDocumentHandle, PdfPageHandle, PdfRenderEngine
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["PdfDocumentHandle", "PdfPageHandle", "PdfRenderEngine", "Pypdfium2Engine"]
