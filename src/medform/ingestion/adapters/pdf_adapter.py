"""PDF adapter: one OCR'd (or text-layer) page per PDF page."""

from __future__ import annotations

import logging
from pathlib import Path

import pymupdf

from medform.config import OcrSettings
from medform.ingestion.models import Transcript
from medform.ingestion.ocr import OcrStatus, extract_page_text

logger = logging.getLogger(__name__)

_PDF_MAGIC = b"%PDF-"


class PDFAdapter:
    """Render PDF pages in order and transcribe each of them."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() == ".pdf":
            return True
        if sniffed_bytes is None:
            return False
        return sniffed_bytes.startswith(_PDF_MAGIC)

    def transcribe(self, path: Path, settings: OcrSettings) -> Transcript:
        transcript = Transcript(source_path=str(path), format_name="pdf")

        with pymupdf.open(path) as doc:
            for page_index, page in enumerate(doc, start=1):
                result = extract_page_text(page, page_index, settings=settings)
                if result.status == OcrStatus.OCR_FAILED:
                    logger.warning("OCR failed for %s page %d: %s", path.name, page_index, result.reason)
                transcript.pages.append(result)

        return transcript
