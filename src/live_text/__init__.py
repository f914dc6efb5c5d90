"""
PDF -> per-page OCR artifacts.

Pipeline: page range -> render -> (png) -> (regions -> json) -> (transcript -> txt),
one page at a time, fail-fast.
"""

from .artifacts import ArtifactWriter, encode_transcript, serialize_page_json
from .contracts import DEFAULT_OUT_DIR, LiveTextConfig, LiveTextPage, LiveTextResult, TextOutput
from .module import run_live_text
from .page_range import resolve_page_range

__all__ = [
    "ArtifactWriter",
    "DEFAULT_OUT_DIR",
    "LiveTextConfig",
    "LiveTextPage",
    "LiveTextResult",
    "TextOutput",
    "encode_transcript",
    "resolve_page_range",
    "run_live_text",
    "serialize_page_json",
]
