from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image

from contracts.errors import EncodingError


@dataclass(slots=True)
class RasterImage:
    """
    A rendered page raster.

    Owned by the page step that created it; use as a context manager so the
    pixel buffer is released once the page's artifacts are written.
    """

    image: Image.Image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def encode_png(self) -> bytes:
        buf = io.BytesIO()
        try:
            self.image.save(buf, format="PNG")
        except (OSError, ValueError) as e:
            raise EncodingError(
                "Failed to encode raster as PNG",
                code="ENCODING_PNG_FAILED",
                detail={"width": self.width, "height": self.height, "error": repr(e)},
            ) from e
        return buf.getvalue()

    def close(self) -> None:
        self.image.close()

    def __enter__(self) -> "RasterImage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
