from __future__ import annotations

import logging
from typing import Callable

from contracts.errors import ConfigurationError
from contracts.page import Page, Size
from ocr.contracts import OcrConfig, OcrEngineName
from ocr.engines.base import RegionOcrEngine, TranscriptOcrEngine
from ocr.engines.tesseract_cli import TesseractRegionEngine, TesseractTranscriptEngine
from ocr.extractors import extract_regions, extract_transcript
from render_pdf.engines import PdfRenderEngine, Pypdfium2Engine
from render_pdf.renderer import render_page

from .artifacts import ArtifactWriter, encode_transcript, serialize_page_json
from .contracts import LiveTextConfig, LiveTextPage, LiveTextResult
from .page_range import resolve_page_range

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def _get_render_engine() -> PdfRenderEngine:
    return Pypdfium2Engine()


def _get_region_engine(engine: OcrEngineName) -> RegionOcrEngine:
    if engine == OcrEngineName.TESSERACT_CLI:
        return TesseractRegionEngine()
    raise ConfigurationError(
        f"Unsupported OCR engine: {engine}", code="CONFIG_BAD_ENGINE", detail={"engine": str(engine)}
    )


def _get_transcript_engine(engine: OcrEngineName) -> TranscriptOcrEngine:
    if engine == OcrEngineName.TESSERACT_CLI:
        return TesseractTranscriptEngine()
    raise ConfigurationError(
        f"Unsupported OCR engine: {engine}", code="CONFIG_BAD_ENGINE", detail={"engine": str(engine)}
    )


def run_live_text(*, config: LiveTextConfig, progress: ProgressCallback | None = None) -> LiveTextResult:
    """
    Render and recognize every selected page of `config.input`.

    Per page, strictly in order: render -> PNG -> regions/JSON -> transcript/TXT
    -> progress(page_num, page_count). Any failure raises and ends the run;
    artifacts of pages already finished stay on disk.
    """

    text_enabled = config.text_enabled()
    ocr_config: OcrConfig = config.ocr

    region_engine = _get_region_engine(ocr_config.engine) if config.json else None
    transcript_engine = _get_transcript_engine(ocr_config.engine) if text_enabled else None

    render_engine = _get_render_engine()
    writer = ArtifactWriter(out_dir=config.out_dir, overwrite=config.overwrite)

    logger.info(
        "processing %s (png=%s json=%s text=%s ratio=%s)",
        config.input,
        config.png,
        config.json,
        text_enabled,
        config.ratio,
    )

    with render_engine.open_document(pdf_file=config.input) as document:
        page_count = document.page_count()
        writer.ensure_out_dir()

        pages: list[LiveTextPage] = []
        for page_num in resolve_page_range(start=config.start, end=config.end, page_count=page_count):
            page = document.get_page(page_num)
            try:
                raster = render_page(page, ratio=config.ratio, page_num=page_num)
            finally:
                page.close()

            outputs: list[str] = []
            with raster:
                if config.png:
                    out = writer.write(page_num=page_num, extension="png", data=raster.encode_png())
                    outputs.append(out.name)

                if region_engine is not None:
                    items = extract_regions(engine=region_engine, config=ocr_config, raster=raster)
                    record = Page(size=Size(width=raster.width, height=raster.height), items=items)
                    out = writer.write(page_num=page_num, extension="json", data=serialize_page_json(record))
                    outputs.append(out.name)

                if transcript_engine is not None:
                    transcript = extract_transcript(engine=transcript_engine, config=ocr_config, raster=raster)
                    out = writer.write(page_num=page_num, extension="txt", data=encode_transcript(transcript))
                    outputs.append(out.name)

            pages.append(LiveTextPage(page_num=page_num, outputs=outputs))
            if progress is not None:
                progress(page_num, page_count)

    return LiveTextResult(
        source=str(config.input),
        page_count=page_count,
        pages=pages,
        meta={
            "backend": render_engine.backend_id(),
            "backend_version": render_engine.backend_version(),
            "ocr_engine": ocr_config.engine.value,
            "ratio": config.ratio,
            "text": text_enabled,
        },
    )
