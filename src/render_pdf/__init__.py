"""
Page rasterization (PDF -> in-memory page images).

This package performs NO OCR and NO text extraction. It opens documents
through a swappable engine and draws single pages onto white canvases.
"""

from .engines import PdfDocumentHandle, PdfPageHandle, PdfRenderEngine, Pypdfium2Engine
from .raster import RasterImage
from .renderer import DEFAULT_RATIO, raster_size, render_page

__all__ = [
    "DEFAULT_RATIO",
    "PdfDocumentHandle",
    "PdfPageHandle",
    "PdfRenderEngine",
    "Pypdfium2Engine",
    "RasterImage",
    "raster_size",
    "render_page",
]
