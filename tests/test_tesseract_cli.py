from __future__ import annotations

import subprocess
import unittest
from unittest.mock import patch

from PIL import Image

from contracts.errors import OcrError
from ocr.contracts import OcrConfig
from ocr.engines.tesseract_cli import TesseractRegionEngine, TesseractTranscriptEngine, parse_tsv_regions

_HEADER = "level\tpage_num\tblock_num\tpar_num\tline_num\tword_num\tleft\ttop\twidth\theight\tconf\ttext"


def _tsv(*rows: str) -> str:
    return "\n".join([_HEADER, *rows]) + "\n"


_SAMPLE = _tsv(
    "1\t1\t0\t0\t0\t0\t0\t0\t1000\t2000\t-1\t",
    "2\t1\t1\t0\t0\t0\t100\t1600\t400\t300\t-1\t",
    "4\t1\t1\t1\t1\t0\t100\t1600\t200\t200\t-1\t",
    "5\t1\t1\t1\t1\t2\t170\t1600\t130\t200\t80\tworld",
    "5\t1\t1\t1\t1\t1\t100\t1600\t60\t200\t90\tHello",
    "4\t1\t1\t1\t2\t0\t100\t1850\t0\t0\t-1\t",
    "5\t1\t1\t1\t2\t1\t100\t1850\t50\t40\t70\tsecond",
    "4\t1\t1\t1\t3\t0\t100\t1900\t50\t40\t-1\t",
    "5\t1\t1\t1\t3\t1\t100\t1900\t50\t40\t-1\t ",
)


def _completed(stdout: bytes, returncode: int = 0, stderr: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["tesseract"], returncode=returncode, stdout=stdout, stderr=stderr)


class TestParseTsvRegions(unittest.TestCase):
    def test_lines_become_regions_in_structural_order(self) -> None:
        regions = parse_tsv_regions(_SAMPLE, width=1000, height=2000)

        self.assertEqual([r.top_candidate().text for r in regions], ["Hello world", "second"])
        self.assertTrue(all(len(r.candidates) == 1 for r in regions))

        first = regions[0].top_candidate()
        self.assertAlmostEqual(first.confidence, 0.85)
        box = first.bounding_box()
        self.assertAlmostEqual(box.x, 0.1)
        self.assertAlmostEqual(box.y, 0.1)
        self.assertAlmostEqual(box.width, 0.2)
        self.assertAlmostEqual(box.height, 0.1)

    def test_empty_line_geometry_gives_no_box(self) -> None:
        regions = parse_tsv_regions(_SAMPLE, width=1000, height=2000)
        self.assertIsNone(regions[1].top_candidate().bounding_box())

    def test_no_rows(self) -> None:
        self.assertEqual(parse_tsv_regions("", width=10, height=10), [])
        self.assertEqual(parse_tsv_regions(_HEADER + "\n", width=10, height=10), [])


class TestTesseractEngines(unittest.TestCase):
    def setUp(self) -> None:
        self.image = Image.new("RGB", (1000, 2000), (255, 255, 255))

    def tearDown(self) -> None:
        self.image.close()

    def test_region_engine_command_and_parse(self) -> None:
        config = OcrConfig(locales=("en-US", "ja-JP"))
        with patch(
            "ocr.engines.tesseract_cli.subprocess.run", return_value=_completed(_SAMPLE.encode("utf-8"))
        ) as run:
            regions = TesseractRegionEngine().recognize_regions(config=config, image=self.image)

        cmd = run.call_args.args[0]
        self.assertEqual(cmd, ["tesseract", "stdin", "stdout", "-l", "eng+jpn", "tsv"])
        self.assertTrue(run.call_args.kwargs["input"].startswith(b"\x89PNG"))
        self.assertEqual(len(regions), 2)

    def test_no_locales_omits_language(self) -> None:
        with patch("ocr.engines.tesseract_cli.subprocess.run", return_value=_completed(b"Hi\n\f")) as run:
            text = TesseractTranscriptEngine().transcribe(config=OcrConfig(), image=self.image)

        self.assertEqual(run.call_args.args[0], ["tesseract", "stdin", "stdout"])
        self.assertEqual(text, "Hi\n")

    def test_missing_binary(self) -> None:
        with patch("ocr.engines.tesseract_cli.subprocess.run", side_effect=FileNotFoundError("tesseract")):
            with self.assertRaises(OcrError) as ctx:
                TesseractTranscriptEngine().transcribe(config=OcrConfig(), image=self.image)
        self.assertEqual(ctx.exception.code, "OCR_BACKEND_NOT_INSTALLED")

    def test_non_zero_exit(self) -> None:
        with patch(
            "ocr.engines.tesseract_cli.subprocess.run",
            return_value=_completed(b"", returncode=1, stderr=b"Failed loading language 'xyz'"),
        ):
            with self.assertRaises(OcrError) as ctx:
                TesseractRegionEngine().recognize_regions(config=OcrConfig(), image=self.image)
        self.assertEqual(ctx.exception.code, "OCR_BACKEND_ERROR")
        self.assertEqual(ctx.exception.detail["returncode"], 1)
        self.assertIn("xyz", ctx.exception.detail["stderr"])


if __name__ == "__main__":
    unittest.main()
