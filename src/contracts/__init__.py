"""
Shared data model and error taxonomy.

`Page`/`Size`/`Item`/`Rect` are the schema of the per-page JSON artifact.
Every fatal pipeline error derives from `LiveTextError`.
"""

from .errors import (
    ConfigurationError,
    EncodingError,
    FileSystemError,
    LiveTextError,
    OcrError,
    RenderError,
    ResourceInitError,
)
from .page import Item, Page, Rect, Size

__all__ = [
    "ConfigurationError",
    "EncodingError",
    "FileSystemError",
    "Item",
    "LiveTextError",
    "OcrError",
    "Page",
    "Rect",
    "RenderError",
    "ResourceInitError",
    "Size",
]
