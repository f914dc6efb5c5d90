from __future__ import annotations

from typing import Any


class LiveTextError(Exception):
    """
    Base class for every fatal pipeline error.

    `code` is a stable identifier (e.g. "OUTPUT_EXISTS"); `detail` carries
    machine-readable context for logs.
    """

    default_code = "LIVE_TEXT_ERROR"

    def __init__(self, message: str, *, code: str | None = None, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail = detail or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ConfigurationError(LiveTextError):
    default_code = "CONFIG_INVALID"


class ResourceInitError(LiveTextError):
    default_code = "RESOURCE_INIT_FAILED"


class RenderError(LiveTextError):
    default_code = "RENDER_FAILED"


class OcrError(LiveTextError):
    default_code = "OCR_FAILED"


class EncodingError(LiveTextError):
    default_code = "ENCODING_FAILED"


class FileSystemError(LiveTextError):
    default_code = "FILESYSTEM_ERROR"
