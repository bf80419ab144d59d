"""TXT adapter for transcripts produced by an external OCR run.

Pages are separated by form feeds, which is how Tesseract and pdftotext
delimit pages in plain-text output.
"""

from __future__ import annotations

from pathlib import Path

from charset_normalizer import from_bytes

from medform.config import OcrSettings
from medform.ingestion.models import Transcript
from medform.ingestion.ocr import OcrStatus, PageOcrResult

PAGE_SEPARATOR = "\f"


class TXTAdapter:
    """Read already-transcribed text with robust charset handling."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        return path.suffix.lower() == ".txt"

    def transcribe(self, path: Path, settings: OcrSettings) -> Transcript:
        raw = path.read_bytes()
        text = raw.decode(self._detect_encoding(raw))

        transcript = Transcript(source_path=str(path), format_name="txt")
        if not text.strip():
            return transcript

        for page_index, page_text in enumerate(text.split(PAGE_SEPARATOR), start=1):
            transcript.pages.append(
                PageOcrResult(page_index=page_index, status=OcrStatus.EMBEDDED, text=page_text)
            )
        return transcript

    def _detect_encoding(self, raw: bytes) -> str:
        if not raw:
            return "utf-8"

        best = from_bytes(raw).best()
        if best and best.encoding:
            return best.encoding

        for fallback in ("utf-8", "cp1252"):
            try:
                raw.decode(fallback)
                return fallback
            except UnicodeDecodeError:
                continue
        raise ValueError("Could not detect TXT encoding")
