from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .locales import tesseract_language_arg


class OcrEngineName(str, Enum):
    """
    OCR backends supported by this module.
    """

    TESSERACT_CLI = "tesseract_cli"


@dataclass(frozen=True, slots=True)
class NormalizedBox:
    """
    Engine-convention bounding box: unit square, origin bottom-left.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def max_y(self) -> float:
        return self.y + self.height


@dataclass(frozen=True, slots=True)
class RecognizedCandidate:
    """
    One text hypothesis for a detected region.

    `box` is the normalized box of the full text span when the engine could
    resolve one.
    """

    text: str
    confidence: float | None = None  # 0..1 when available
    box: NormalizedBox | None = None

    def bounding_box(self) -> NormalizedBox | None:
        """
        Normalized box for the whole candidate string, or None.

        Raises ValueError when the stored geometry is degenerate.
        """

        if self.box is None:
            return None
        b = self.box
        if b.width < 0 or b.height < 0:
            raise ValueError(f"negative box extent: {b!r}")
        return b


@dataclass(frozen=True, slots=True)
class RecognizedRegion:
    """
    A detected text region with candidates ranked best-first.
    """

    candidates: list[RecognizedCandidate]

    def top_candidate(self) -> RecognizedCandidate | None:
        return self.candidates[0] if self.candidates else None


@dataclass(frozen=True, slots=True)
class OcrConfig:
    """
    OCR configuration shared by the region and transcript capabilities.

    An empty `locales` tuple lets the engine pick its default language;
    otherwise recognition is restricted to the given locales.
    """

    engine: OcrEngineName = OcrEngineName.TESSERACT_CLI
    locales: tuple[str, ...] = field(default_factory=tuple)
    tesseract_cmd: str = "tesseract"
    psm: int | None = None  # Tesseract page segmentation mode; if None, use default.

    def __post_init__(self) -> None:
        if not isinstance(self.locales, tuple):
            raise TypeError("locales must be a tuple of strings")
        # Fail at start-up, not on the first page.
        self.language_arg()

    def language_arg(self) -> str | None:
        return tesseract_language_arg(self.locales)
