from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from contracts.errors import LiveTextError
from ocr.contracts import OcrConfig
from render_pdf.renderer import DEFAULT_RATIO

from .contracts import DEFAULT_OUT_DIR, LiveTextConfig, TextOutput
from .module import run_live_text

_TRUE = {"true", "yes", "y", "1", "on"}
_FALSE = {"false", "no", "n", "0", "off"}


def _parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdf-live-text",
        description="Render PDF pages to images and run OCR: per-page PNG / JSON / TXT artifacts.",
    )
    p.add_argument("-f", "--force", action="store_true", help="Overwrite existing files.")
    p.add_argument("-p", "--png", action="store_true", help="Output PNG files (for debugging).")
    p.add_argument("-j", "--json", action="store_true", help="Output JSON files.")
    p.add_argument(
        "-t",
        "--text",
        type=_parse_bool,
        default=None,
        metavar="BOOL",
        help="Output text files. Default to true if there are no other textual outputs (i.e., JSON).",
    )
    p.add_argument(
        "-r",
        "--ratio",
        type=float,
        default=DEFAULT_RATIO,
        help="Scale factor to render PDF pages as images. Larger values may improve text recognition accuracy.",
    )
    p.add_argument(
        "-l",
        "--locales",
        action="append",
        default=None,
        metavar="LOCALE",
        help="Locale to recognize (repeatable). Default: engine default language.",
    )
    p.add_argument("-s", "--start", type=int, default=None, help="Start page number (1-based, inclusive).")
    p.add_argument("-e", "--end", type=int, default=None, help="End page number (1-based, inclusive).")
    p.add_argument("-o", "--out", type=Path, default=DEFAULT_OUT_DIR, help="Output directory.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    p.add_argument("input", type=Path, help="Input PDF file.")
    return p


def setup_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_progress(page_num: int, page_count: int) -> None:
    print(f"DONE: {page_num}/{page_count}", flush=True)


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        config = LiveTextConfig(
            input=args.input,
            out_dir=args.out,
            ratio=args.ratio,
            png=args.png,
            json=args.json,
            text=TextOutput.from_flag(args.text),
            start=args.start,
            end=args.end,
            overwrite=args.force,
            ocr=OcrConfig(locales=tuple(args.locales or ())),
        )
        run_live_text(config=config, progress=_print_progress)
    except LiveTextError as e:
        logging.getLogger(__name__).debug("run failed: code=%s detail=%s", e.code, e.detail)
        print(f"error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
