"""Shared adapter contract for per-format page sources."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from medform.config import OcrSettings
from medform.ingestion.models import Transcript


@runtime_checkable
class PageSourceAdapter(Protocol):
    """Protocol that every input format adapter must implement."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        """Return True when this adapter can read the given file."""

    def transcribe(self, path: Path, settings: OcrSettings) -> Transcript:
        """Return the page texts of the file in reading order."""
