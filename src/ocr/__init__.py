"""
OCR stage (perception only).

Two independent capabilities over one recognition backend:
- region recognition: ranked text candidates per region + normalized geometry
- transcript recognition: one reading-order text blob per page

Engines perform no correction, merging, or inference.
"""

from .contracts import (
    NormalizedBox,
    OcrConfig,
    OcrEngineName,
    RecognizedCandidate,
    RecognizedRegion,
)
from .extractors import extract_regions, extract_transcript, normalized_to_pixel_rect

__all__ = [
    "NormalizedBox",
    "OcrConfig",
    "OcrEngineName",
    "RecognizedCandidate",
    "RecognizedRegion",
    "extract_regions",
    "extract_transcript",
    "normalized_to_pixel_rect",
]
