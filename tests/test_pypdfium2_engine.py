from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import pypdfium2 as pdfium
import pypdfium2.raw as pdfium_c

from contracts.errors import RenderError, ResourceInitError
from render_pdf.engines import Pypdfium2Engine
from render_pdf.renderer import render_page

_BLACK = (0, 0, 0)
_WHITE = (255, 255, 255)


def _fill_rect(page, *, x: float, y: float, width: float, height: float) -> None:
    """Draw a solid black rectangle at PDF coordinates (origin bottom-left)."""
    obj = pdfium_c.FPDFPageObj_CreateNewRect(x, y, width, height)
    pdfium_c.FPDFPageObj_SetFillColor(obj, 0, 0, 0, 255)
    pdfium_c.FPDFPath_SetDrawMode(obj, pdfium_c.FPDF_FILLMODE_ALTERNATE, False)
    pdfium_c.FPDFPage_InsertObject(page.raw, obj)


class TestPypdfium2Draw(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.pdf_file = Path(self._tmp.name) / "doc.pdf"
        self.engine = Pypdfium2Engine()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _save(self, *, rects: list[tuple[float, float, float, float]], rotation: int = 0, cropbox=None) -> None:
        pdf = pdfium.PdfDocument.new()
        try:
            page = pdf.new_page(200, 400)
            for x, y, w, h in rects:
                _fill_rect(page, x=x, y=y, width=w, height=h)
            page.gen_content()
            if rotation:
                page.set_rotation(rotation)
            if cropbox is not None:
                page.set_cropbox(*cropbox)
            page.close()
            pdf.save(str(self.pdf_file))
        finally:
            pdf.close()

    def _render(self, *, ratio: float):
        with self.engine.open_document(pdf_file=self.pdf_file) as doc:
            self.assertEqual(doc.page_count(), 1)
            page = doc.get_page(1)
            try:
                return render_page(page, ratio=ratio, page_num=1)
            finally:
                page.close()

    def test_unrotated_mark_lands_at_document_position(self) -> None:
        self._save(rects=[(20, 300, 20, 20)])
        with self._render(ratio=2.0) as raster:
            self.assertEqual((raster.width, raster.height), (400, 800))
            # (20..40, 300..320) in PDF space -> x 40..80, y (400-320)*2..(400-300)*2
            self.assertEqual(raster.image.getpixel((60, 180)), _BLACK)
            self.assertEqual(raster.image.getpixel((60, 620)), _WHITE)
            self.assertEqual(raster.image.getpixel((340, 180)), _WHITE)

    def test_rotated_page_keeps_media_box_orientation(self) -> None:
        self._save(rects=[(0, 0, 200, 400)], rotation=90)
        with self._render(ratio=2.0) as raster:
            self.assertEqual((raster.width, raster.height), (400, 800))
            self.assertEqual(raster.image.convert("L").getextrema(), (0, 0))

    def test_rotated_page_mark_position(self) -> None:
        self._save(rects=[(20, 300, 20, 20)], rotation=270)
        with self._render(ratio=2.0) as raster:
            self.assertEqual(raster.image.getpixel((60, 180)), _BLACK)
            self.assertEqual(raster.image.getpixel((340, 620)), _WHITE)

    def test_inset_cropbox_is_placed_inside_media_box(self) -> None:
        self._save(rects=[(100, 200, 10, 10)], cropbox=(50, 50, 150, 350))
        with self._render(ratio=2.0) as raster:
            self.assertEqual((raster.width, raster.height), (400, 800))
            # (100..110, 200..210) -> x 200..220, y 380..400
            self.assertEqual(raster.image.getpixel((210, 390)), _BLACK)
            # Where the square would be if the crop box were pasted at the origin.
            self.assertEqual(raster.image.getpixel((110, 290)), _WHITE)
            # Outside the crop box the canvas stays white.
            self.assertEqual(raster.image.getpixel((10, 10)), _WHITE)

    def test_page_out_of_range(self) -> None:
        self._save(rects=[])
        with self.engine.open_document(pdf_file=self.pdf_file) as doc:
            with self.assertRaises(RenderError) as ctx:
                doc.get_page(2)
        self.assertEqual(ctx.exception.code, "RENDER_PAGE_OUT_OF_RANGE")

    def test_unreadable_document(self) -> None:
        self.pdf_file.write_bytes(b"not a pdf")
        with self.assertRaises(ResourceInitError) as ctx:
            self.engine.open_document(pdf_file=self.pdf_file)
        self.assertEqual(ctx.exception.code, "RESOURCE_DOCUMENT_OPEN_FAILED")


if __name__ == "__main__":
    unittest.main()
