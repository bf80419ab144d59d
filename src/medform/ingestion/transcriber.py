"""Routing entrypoint that turns a source file into page texts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from medform.config import OcrSettings
from medform.ingestion.adapters.base import PageSourceAdapter
from medform.ingestion.models import Transcript


@dataclass(slots=True)
class TranscriptionError(Exception):
    """Domain error for adapter routing and page transcription failures."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


class Transcriber:
    """Resolve the right adapter for a file and return its page texts."""

    def __init__(self, settings: OcrSettings | None = None, *, sniff_bytes: int = 16) -> None:
        self._settings = settings or OcrSettings()
        self._sniff_bytes = sniff_bytes
        self._adapter_map: dict[str, PageSourceAdapter] = {}

    @property
    def adapter_map(self) -> dict[str, PageSourceAdapter]:
        """Registered adapters keyed by adapter name."""

        return dict(self._adapter_map)

    def register_adapter(self, name: str, adapter: PageSourceAdapter) -> None:
        if not name:
            raise ValueError("Adapter name cannot be empty")
        self._adapter_map[name] = adapter

    def transcribe(self, path: str | Path) -> Transcript:
        """Transcribe ``path`` with the first adapter that supports it."""

        source = Path(path)
        adapter = self._resolve_adapter(source, self._sniff(source))
        if adapter is None:
            raise TranscriptionError(source, "No adapter registered for file content")

        try:
            transcript = adapter.transcribe(source, self._settings)
        except Exception as exc:
            raise TranscriptionError(source, f"Adapter transcription failed: {exc}") from exc

        if not isinstance(transcript, Transcript):
            raise TranscriptionError(source, "Adapter returned non-canonical output")
        return transcript

    def _resolve_adapter(self, path: Path, sniffed: bytes) -> PageSourceAdapter | None:
        # A suffix claimed by any adapter wins over magic bytes: an OCR
        # transcript starting with "BM" is still a .txt file.
        for adapter in self._adapter_map.values():
            if adapter.supports(path, None):
                return adapter
        for adapter in self._adapter_map.values():
            if adapter.supports(path, sniffed):
                return adapter
        return None

    def _sniff(self, path: Path) -> bytes:
        try:
            with path.open("rb") as handle:
                return handle.read(self._sniff_bytes)
        except OSError as exc:
            raise TranscriptionError(path, f"Failed to read source file: {exc}") from exc
