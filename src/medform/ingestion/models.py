"""Page-level transcription output produced by the ingestion adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from medform.ingestion.ocr import PageOcrResult
from medform.models import RawTranscript


@dataclass(slots=True)
class Transcript:
    """Ordered page texts for one source file plus per-page OCR status."""

    source_path: str
    format_name: str
    pages: list[PageOcrResult] = field(default_factory=list)

    @property
    def page_texts(self) -> list[str]:
        return [page.text for page in self.pages]

    def to_raw(self) -> RawTranscript:
        return RawTranscript(file_name=Path(self.source_path).name, pages=self.page_texts)
