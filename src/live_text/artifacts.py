from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from contracts.errors import EncodingError, FileSystemError
from contracts.page import Page

logger = logging.getLogger(__name__)


def serialize_page_json(page: Page) -> bytes:
    """
    Stable JSON serialization of a page record (UTF-8, trailing newline).
    """

    payload: dict[str, Any] = page.to_dict()
    try:
        return (json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n").encode("utf-8")
    except (TypeError, ValueError) as e:
        # UnicodeEncodeError is a ValueError (lone surrogates from the engine).
        raise EncodingError("Failed to encode page as JSON", code="ENCODING_JSON_FAILED") from e


def encode_transcript(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError("Failed to encode a string to UTF-8", code="ENCODING_TEXT_FAILED") from e


class ArtifactWriter:
    """
    Writes `<out_dir>/<page_num>.<extension>` artifacts.

    With `overwrite=False` an existing file is never touched: the write fails
    with FileSystemError(code="OUTPUT_EXISTS"). With `overwrite=True` the file
    is replaced in full through a temporary sibling + rename.
    """

    def __init__(self, *, out_dir: Path, overwrite: bool) -> None:
        self.out_dir = out_dir
        self.overwrite = overwrite
        self._dir_ready = False

    def path_for(self, *, page_num: int, extension: str) -> Path:
        return self.out_dir / f"{page_num}.{extension}"

    def ensure_out_dir(self) -> None:
        if self._dir_ready:
            return
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(
                f"Failed to create output directory: {self.out_dir}",
                code="OUTPUT_DIR_CREATE_FAILED",
                detail={"out_dir": str(self.out_dir), "error": repr(e)},
            ) from e
        self._dir_ready = True

    def write(self, *, page_num: int, extension: str, data: bytes) -> Path:
        self.ensure_out_dir()
        out_file = self.path_for(page_num=page_num, extension=extension)
        if self.overwrite:
            self._replace(out_file, data)
        else:
            self._create_new(out_file, data)
        logger.debug("wrote %s (%d bytes)", out_file, len(data))
        return out_file

    def _create_new(self, out_file: Path, data: bytes) -> None:
        try:
            with out_file.open("xb") as f:
                f.write(data)
        except FileExistsError as e:
            raise FileSystemError(
                f"Output file already exists: {out_file} (use --force to overwrite)",
                code="OUTPUT_EXISTS",
                detail={"path": str(out_file)},
            ) from e
        except OSError as e:
            raise FileSystemError(
                f"Failed to write output file: {out_file}",
                code="OUTPUT_WRITE_FAILED",
                detail={"path": str(out_file), "error": repr(e)},
            ) from e

    def _replace(self, out_file: Path, data: bytes) -> None:
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=out_file.parent, prefix=f".{out_file.name}.", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                f.write(data)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, out_file)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FileSystemError(
                f"Failed to write output file: {out_file}",
                code="OUTPUT_WRITE_FAILED",
                detail={"path": str(out_file), "error": repr(e)},
            ) from e
