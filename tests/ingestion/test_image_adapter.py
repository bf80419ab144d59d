from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from medform.config import OcrSettings
from medform.ingestion.adapters import image_adapter
from medform.ingestion.adapters.image_adapter import ImageAdapter
from medform.ingestion.ocr import OcrStatus, PageOcrResult


def test_image_adapter_yields_one_page_per_frame(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    tiff_path = tmp_path / "consent.tiff"
    frames = [Image.new("RGB", (8, 8), "white"), Image.new("RGB", (8, 8), "black")]
    frames[0].save(tiff_path, save_all=True, append_images=frames[1:])
    seen_modes: list[str] = []

    def _fake_extract(image, page_index, *, settings=None):
        seen_modes.append(image.mode)
        return PageOcrResult(page_index=page_index, status=OcrStatus.OCR_SUCCESS, text=f"frame {page_index}")

    monkeypatch.setattr(image_adapter, "extract_image_text", _fake_extract)

    transcript = ImageAdapter().transcribe(tiff_path, OcrSettings())

    assert transcript.format_name == "image"
    assert transcript.page_texts == ["frame 1", "frame 2"]
    assert seen_modes == ["RGB", "RGB"]


def test_image_adapter_recognizes_suffixes_and_magic(tmp_path: Path) -> None:
    adapter = ImageAdapter()

    assert adapter.supports(tmp_path / "photo.JPG")
    assert adapter.supports(tmp_path / "upload.bin", b"\x89PNG\r\n\x1a\n")
    assert adapter.supports(tmp_path / "upload.bin", b"RIFF\x00\x00\x00\x00WEBPVP8 ")
    assert not adapter.supports(tmp_path / "upload.bin", b"%PDF-1.7")


def test_image_adapter_ignores_magic_for_text_and_pdf_suffixes(tmp_path: Path) -> None:
    adapter = ImageAdapter()

    assert not adapter.supports(tmp_path / "consent.txt", b"BMI: 24.5\n")
    assert not adapter.supports(tmp_path / "scan.pdf", b"BM")
