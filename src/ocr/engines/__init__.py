from .base import RegionOcrEngine, TranscriptOcrEngine
from .tesseract_cli import TesseractRegionEngine, TesseractTranscriptEngine

__all__ = [
    "RegionOcrEngine",
    "TesseractRegionEngine",
    "TesseractTranscriptEngine",
    "TranscriptOcrEngine",
]
