from __future__ import annotations

from pathlib import Path

import pytest

from medform.config import OcrSettings
from medform.ingestion import Transcriber, Transcript, TranscriptionError
from medform.ingestion.adapters import build_default_adapters


def _configured_transcriber(settings: OcrSettings | None = None) -> Transcriber:
    transcriber = Transcriber(settings)
    for name, adapter in build_default_adapters().items():
        transcriber.register_adapter(name, adapter)
    return transcriber


class _ExplodingAdapter:
    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        return True

    def transcribe(self, path: Path, settings: OcrSettings) -> Transcript:
        raise RuntimeError("renderer crashed")


class _RawTextAdapter:
    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        return True

    def transcribe(self, path: Path, settings: OcrSettings):
        return ["not", "a", "transcript"]


def test_default_adapters_are_registered_in_priority_order() -> None:
    assert list(_configured_transcriber().adapter_map) == ["pdf", "image", "txt"]


def test_transcriber_routes_txt_and_converts_to_raw(tmp_path: Path) -> None:
    sample = tmp_path / "sheet.txt"
    sample.write_text("Patient Name: Ravi\fAge: 54", encoding="utf-8")

    transcript = _configured_transcriber().transcribe(sample)
    raw = transcript.to_raw()

    assert transcript.format_name == "txt"
    assert raw.file_name == "sheet.txt"
    assert raw.pages == ["Patient Name: Ravi", "Age: 54"]


def test_transcriber_prefers_suffix_over_magic_bytes(tmp_path: Path) -> None:
    # "BM" is also the bitmap signature.
    sample = tmp_path / "consent.txt"
    sample.write_text("BMI: 24.5\nRelative Name: Mary Roe\n", encoding="utf-8")

    transcript = _configured_transcriber().transcribe(sample)

    assert transcript.format_name == "txt"
    assert transcript.page_texts == ["BMI: 24.5\nRelative Name: Mary Roe\n"]


def test_transcriber_sniffs_when_no_suffix_matches(tmp_path: Path) -> None:
    sample = tmp_path / "upload.bin"
    sample.write_bytes(b"%PDF-1.7 truncated")

    with pytest.raises(TranscriptionError, match="Adapter transcription failed"):
        _configured_transcriber().transcribe(sample)


def test_transcriber_passes_settings_to_adapter(tmp_path: Path) -> None:
    sample = tmp_path / "form.dat"
    sample.write_bytes(b"anything")
    seen: list[OcrSettings] = []

    class _Recording:
        def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
            return sniffed_bytes == b"anything"

        def transcribe(self, path: Path, settings: OcrSettings) -> Transcript:
            seen.append(settings)
            return Transcript(source_path=str(path), format_name="dat")

    settings = OcrSettings(lang="eng+hin")
    transcriber = Transcriber(settings)
    transcriber.register_adapter("dat", _Recording())

    assert transcriber.transcribe(sample).format_name == "dat"
    assert seen == [settings]


def test_transcriber_rejects_unsupported_content(tmp_path: Path) -> None:
    sample = tmp_path / "notes.docx"
    sample.write_bytes(b"PK\x03\x04 not a form")

    with pytest.raises(TranscriptionError, match="No adapter registered"):
        _configured_transcriber().transcribe(sample)


def test_transcriber_reports_unreadable_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.pdf"

    with pytest.raises(TranscriptionError) as excinfo:
        _configured_transcriber().transcribe(missing)

    assert excinfo.value.path == missing
    assert "Failed to read source file" in str(excinfo.value)


def test_transcriber_wraps_adapter_failures(tmp_path: Path) -> None:
    sample = tmp_path / "form.pdf"
    sample.write_bytes(b"%PDF-1.7")
    transcriber = Transcriber()
    transcriber.register_adapter("exploding", _ExplodingAdapter())

    with pytest.raises(TranscriptionError, match="renderer crashed"):
        transcriber.transcribe(sample)


def test_transcriber_rejects_non_canonical_output(tmp_path: Path) -> None:
    sample = tmp_path / "form.pdf"
    sample.write_bytes(b"%PDF-1.7")
    transcriber = Transcriber()
    transcriber.register_adapter("raw", _RawTextAdapter())

    with pytest.raises(TranscriptionError, match="non-canonical"):
        transcriber.transcribe(sample)


def test_register_adapter_requires_name() -> None:
    with pytest.raises(ValueError):
        Transcriber().register_adapter("", _RawTextAdapter())
