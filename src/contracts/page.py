from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Size:
    """
    Raster pixel dimensions of a rendered page.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Size must be at least 1x1, got {self.width}x{self.height}")

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Pixel-space rectangle, origin top-left, axis-aligned.
    """

    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class Item:
    text: str
    rect: Rect | None  # None when the engine could not resolve geometry

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "rect": None if self.rect is None else self.rect.to_dict()}


@dataclass(frozen=True, slots=True)
class Page:
    """
    Structured per-page OCR output (the `<page>.json` artifact).

    `items` keeps the recognition engine's region order.
    """

    size: Size
    items: list[Item]

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size.to_dict(), "items": [i.to_dict() for i in self.items]}
