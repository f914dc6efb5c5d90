from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from contracts.errors import ConfigurationError
from ocr.contracts import OcrConfig
from render_pdf.renderer import DEFAULT_RATIO

DEFAULT_OUT_DIR = Path("out")


class TextOutput(str, Enum):
    """
    Three-valued transcript switch. AUTO resolves against the other outputs
    once per run (see `resolve`).
    """

    AUTO = "auto"
    ON = "on"
    OFF = "off"

    @classmethod
    def from_flag(cls, value: bool | None) -> "TextOutput":
        if value is None:
            return cls.AUTO
        return cls.ON if value else cls.OFF

    def resolve(self, *, json_enabled: bool) -> bool:
        if self is TextOutput.AUTO:
            # Default to a transcript only when no other textual output was asked for.
            return not json_enabled
        return self is TextOutput.ON


@dataclass(frozen=True, slots=True)
class LiveTextConfig:
    """
    Run configuration, built once at start-up.

    `start`/`end` are 1-based and inclusive; None means "from the first" /
    "through the last" page.
    """

    input: Path
    out_dir: Path = DEFAULT_OUT_DIR
    ratio: float = DEFAULT_RATIO
    png: bool = False
    json: bool = False
    text: TextOutput = TextOutput.AUTO
    start: int | None = None
    end: int | None = None
    overwrite: bool = False
    ocr: OcrConfig = field(default_factory=OcrConfig)

    def __post_init__(self) -> None:
        if not isinstance(self.input, Path) or not isinstance(self.out_dir, Path):
            raise TypeError("input and out_dir must be pathlib.Path")
        if isinstance(self.ratio, bool) or not math.isfinite(self.ratio) or self.ratio <= 0:
            raise ConfigurationError(
                f"ratio must be a finite number > 0, got {self.ratio!r}",
                code="CONFIG_BAD_RATIO",
                detail={"ratio": self.ratio},
            )

    def text_enabled(self) -> bool:
        return self.text.resolve(json_enabled=self.json)


@dataclass(frozen=True, slots=True)
class LiveTextPage:
    page_num: int  # 1-indexed, absolute
    outputs: list[str]  # file names written for this page, in write order


@dataclass(frozen=True, slots=True)
class LiveTextResult:
    source: str
    page_count: int
    pages: list[LiveTextPage]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
