from __future__ import annotations

import csv
import io
import logging
import subprocess
from collections import defaultdict
from typing import Any

from PIL import Image

from contracts.errors import EncodingError, OcrError

from ..contracts import NormalizedBox, OcrConfig, RecognizedCandidate, RecognizedRegion
from .base import RegionOcrEngine, TranscriptOcrEngine

logger = logging.getLogger(__name__)

# Tesseract TSV levels: 1=page, 2=block, 3=para, 4=line, 5=word
_LEVEL_LINE = 4
_LEVEL_WORD = 5


def _normalize_confidence(raw_conf: float | None) -> float | None:
    if raw_conf is None:
        return None
    if raw_conf < 0:
        return None
    # Tesseract TSV is typically 0..100; clamp into [0, 1]
    return max(0.0, min(1.0, raw_conf / 100.0))


def _image_to_png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodingError("Failed to encode OCR input as PNG", code="ENCODING_PNG_FAILED") from e
    return buf.getvalue()


def _build_command(*, config: OcrConfig, output: str | None) -> list[str]:
    # "stdin"/"stdout" keep the raster in memory; nothing touches disk.
    cmd = [config.tesseract_cmd, "stdin", "stdout"]
    lang = config.language_arg()
    if lang is not None:
        cmd.extend(["-l", lang])
    if config.psm is not None:
        cmd.extend(["--psm", str(config.psm)])
    if output is not None:
        cmd.append(output)
    return cmd


def _run_tesseract(*, config: OcrConfig, image: Image.Image, output: str | None) -> str:
    cmd = _build_command(config=config, output=output)
    logger.debug("running %s", " ".join(cmd))

    try:
        proc = subprocess.run(
            cmd,
            input=_image_to_png_bytes(image),
            check=False,
            capture_output=True,
        )
    except FileNotFoundError as e:
        raise OcrError(
            f"{config.tesseract_cmd} binary not found on PATH",
            code="OCR_BACKEND_NOT_INSTALLED",
            detail={"expected_command": config.tesseract_cmd},
        ) from e
    except OSError as e:
        raise OcrError(
            "Failed to start OCR backend",
            code="OCR_BACKEND_ERROR",
            detail={"command": cmd, "error": repr(e)},
        ) from e

    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace")
        raise OcrError(
            "OCR backend returned a non-zero exit code",
            code="OCR_BACKEND_ERROR",
            detail={"returncode": proc.returncode, "stderr": stderr[-4000:]},
        )

    try:
        return proc.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise OcrError(
            "OCR backend produced non UTF-8 output",
            code="OCR_BAD_OUTPUT",
            detail={"error": repr(e)},
        ) from e


def _parse_int(row: dict[str, Any], key: str, default: str = "0") -> int:
    return int(row.get(key, "") or default)


def parse_tsv_regions(tsv: str, *, width: int, height: int) -> list[RecognizedRegion]:
    """
    Parse tesseract TSV into line regions, in (block, par, line) order.

    Words of a line are joined with single spaces. Line geometry comes from
    the level-4 row and is converted into the normalized bottom-left
    convention; lines whose geometry is missing or empty carry no box.
    """

    line_boxes: dict[tuple[int, int, int, int], NormalizedBox] = {}
    words: dict[tuple[int, int, int, int], list[tuple[int, str, float | None]]] = defaultdict(list)

    reader = csv.DictReader(tsv.splitlines(), delimiter="\t", quoting=csv.QUOTE_NONE)
    for row in reader:
        try:
            level = _parse_int(row, "level")
            key = (
                _parse_int(row, "page_num", "1"),
                _parse_int(row, "block_num"),
                _parse_int(row, "par_num"),
                _parse_int(row, "line_num"),
            )
        except ValueError:
            continue

        if level == _LEVEL_LINE:
            try:
                left = _parse_int(row, "left")
                top = _parse_int(row, "top")
                w = _parse_int(row, "width")
                h = _parse_int(row, "height")
            except ValueError:
                # Malformed geometry rows are dropped (no guessing).
                continue
            if w <= 0 or h <= 0:
                continue
            line_boxes[key] = NormalizedBox(
                x=left / width,
                y=(height - (top + h)) / height,
                width=w / width,
                height=h / height,
            )
        elif level == _LEVEL_WORD:
            text = row.get("text") or ""
            if text.strip() == "":
                continue
            conf_str = row.get("conf", "")
            try:
                raw_conf: float | None = float(conf_str) if conf_str != "" else None
            except ValueError:
                raw_conf = None
            try:
                word_num = _parse_int(row, "word_num")
            except ValueError:
                word_num = 0
            words[key].append((word_num, text, _normalize_confidence(raw_conf)))

    regions: list[RecognizedRegion] = []
    for key in sorted(words):
        line_words = sorted(words[key], key=lambda w: w[0])
        confs = [c for _, _, c in line_words if c is not None]
        candidate = RecognizedCandidate(
            text=" ".join(t for _, t, _ in line_words),
            confidence=(sum(confs) / len(confs)) if confs else None,
            box=line_boxes.get(key),
        )
        regions.append(RecognizedRegion(candidates=[candidate]))
    return regions


class TesseractRegionEngine(RegionOcrEngine):
    """
    Line-level regions via the `tesseract` CLI, parsed from TSV output.

    Tesseract reports a single hypothesis per line, so every region carries
    exactly one candidate.
    """

    def recognize_regions(self, *, config: OcrConfig, image: Image.Image) -> list[RecognizedRegion]:
        tsv = _run_tesseract(config=config, image=image, output="tsv")
        regions = parse_tsv_regions(tsv, width=image.width, height=image.height)
        logger.debug("tesseract returned %d line regions", len(regions))
        return regions


class TesseractTranscriptEngine(TranscriptOcrEngine):
    """
    Plain-text transcript via the `tesseract` CLI (default txt output).
    """

    def transcribe(self, *, config: OcrConfig, image: Image.Image) -> str:
        text = _run_tesseract(config=config, image=image, output=None)
        # Tesseract terminates each page with a form feed.
        return text.rstrip("\f")
