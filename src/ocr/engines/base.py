from __future__ import annotations

from abc import ABC, abstractmethod

from PIL import Image

from ..contracts import OcrConfig, RecognizedRegion


class RegionOcrEngine(ABC):
    """
    Region-based recognition: ranked candidates per detected text region,
    with optional normalized geometry.

    IMPORTANT:
    - Engines must return literal text hypotheses in engine-reported order.
    - Engines must NOT apply semantic correction/guessing/normalization.
    """

    @abstractmethod
    def recognize_regions(self, *, config: OcrConfig, image: Image.Image) -> list[RecognizedRegion]:
        raise NotImplementedError


class TranscriptOcrEngine(ABC):
    """
    Transcript recognition: one reading-order text blob for the whole image.
    Line-break and layout policy belong to the engine.
    """

    @abstractmethod
    def transcribe(self, *, config: OcrConfig, image: Image.Image) -> str:
        raise NotImplementedError
