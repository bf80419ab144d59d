"""Image adapter for photographed or scanned pages.

Multi-frame files (TIFF, GIF) yield one page per frame.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageSequence

from medform.config import OcrSettings
from medform.ingestion.models import Transcript
from medform.ingestion.ocr import OcrStatus, extract_image_text

logger = logging.getLogger(__name__)

_IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".gif", ".webp"}
_IMAGE_MAGIC = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"II*\x00",
    b"MM\x00*",
    b"GIF87a",
    b"GIF89a",
    b"BM",
)


class ImageAdapter:
    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() in _IMAGE_SUFFIXES:
            return True
        if sniffed_bytes is None:
            return False
        if path.suffix.lower() in {".pdf", ".txt"}:
            return False
        if sniffed_bytes.startswith(b"RIFF") and sniffed_bytes[8:12] == b"WEBP":
            return True
        return sniffed_bytes.startswith(_IMAGE_MAGIC)

    def transcribe(self, path: Path, settings: OcrSettings) -> Transcript:
        transcript = Transcript(source_path=str(path), format_name="image")

        with Image.open(path) as image:
            for page_index, frame in enumerate(ImageSequence.Iterator(image), start=1):
                result = extract_image_text(frame.convert("RGB"), page_index, settings=settings)
                if result.status == OcrStatus.OCR_FAILED:
                    logger.warning("OCR failed for %s frame %d: %s", path.name, page_index, result.reason)
                transcript.pages.append(result)

        return transcript
