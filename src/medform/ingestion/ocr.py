"""Tesseract OCR for scanned form pages.

pytesseract and Pillow are imported only inside the functions that need
them.  If Tesseract is not installed the first scanned page logs a single
warning, all later scanned pages are skipped (``OcrStatus.OCR_SKIPPED``) and
PDF pages with an embedded text layer are never affected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

import pymupdf

from medform.config import OcrSettings

if TYPE_CHECKING:
    from PIL import Image


logger = logging.getLogger(__name__)

# Three-state flag tracking Tesseract availability for the current process.
#   None:  not yet probed
#   True:  Tesseract executed successfully at least once
#   False: Tesseract is not installed / not in PATH
_tesseract_available: bool | None = None


class OcrStatus(Enum):
    EMBEDDED = "embedded"       # PDF text layer was dense enough, OCR skipped
    OCR_SUCCESS = "ocr_success"
    OCR_FAILED = "ocr_failed"   # Tesseract raised an unexpected exception
    OCR_EMPTY = "ocr_empty"     # Tesseract ran but returned no text
    OCR_SKIPPED = "ocr_skipped" # Tesseract not installed


@dataclass(slots=True)
class PageOcrResult:
    page_index: int
    status: OcrStatus
    text: str
    reason: str | None = None


def _page_text_coverage(page: pymupdf.Page, text: str) -> float:
    """Return ratio of text character count to page area (chars / pt²)."""
    rect = page.rect
    area = rect.width * rect.height
    if area == 0:
        return 0.0
    return len(text) / area


def _is_scanned_page(page: pymupdf.Page, text: str, *, threshold: float) -> bool:
    return _page_text_coverage(page, text) < threshold


def _is_tesseract_not_found(exc: Exception) -> bool:
    """Return True when *exc* indicates that the Tesseract binary is missing."""
    # pytesseract.TesseractNotFoundError is matched by name so that pytesseract
    # stays out of module import time.
    if "TesseractNotFoundError" in type(exc).__name__:
        return True
    msg = str(exc).lower()
    return "tesseract is not installed" in msg or "tesseract is not in your path" in msg


def binarize(image: "Image.Image", settings: OcrSettings) -> "Image.Image":
    """Upscale, grayscale and threshold an image around its mean luminance.

    The threshold is the mean luminance minus ``threshold_offset``, clamped to
    ``[threshold_min, threshold_max]``; darker pixels become black and the
    rest white.
    """
    from PIL import ImageStat

    if settings.upscale != 1.0:
        width = max(1, round(image.width * settings.upscale))
        height = max(1, round(image.height * settings.upscale))
        image = image.resize((width, height))

    gray = image.convert("L")
    mean = ImageStat.Stat(gray).mean[0]
    threshold = max(settings.threshold_min, min(settings.threshold_max, mean - settings.threshold_offset))
    return gray.point(lambda value: 0 if value < threshold else 255)


def _recognize(image: "Image.Image", settings: OcrSettings) -> str:
    import pytesseract

    return pytesseract.image_to_string(
        binarize(image, settings),
        lang=settings.lang,
        config=settings.tesseract_config,
    )


def render_page(page: pymupdf.Page, settings: OcrSettings) -> "Image.Image":
    """Rasterize *page* at ``render_scale`` (pymupdf base resolution is 72 DPI)."""
    import io

    from PIL import Image

    mat = pymupdf.Matrix(settings.render_scale, settings.render_scale)
    pix = page.get_pixmap(matrix=mat, colorspace=pymupdf.csRGB)
    return Image.open(io.BytesIO(pix.tobytes("png")))


def _ocr_page(page: pymupdf.Page, settings: OcrSettings) -> str:
    return _recognize(render_page(page, settings), settings)


def _ocr_image(image: "Image.Image", settings: OcrSettings) -> str:
    return _recognize(image, settings)


def _run_ocr(run: Callable[[], str], page_index: int, fallback_text: str) -> PageOcrResult:
    global _tesseract_available

    if _tesseract_available is False:
        return PageOcrResult(page_index=page_index, status=OcrStatus.OCR_SKIPPED, text=fallback_text)

    try:
        ocr_text = run().strip()
    except Exception as exc:
        if _is_tesseract_not_found(exc):
            _tesseract_available = False
            logger.warning(
                "Tesseract is not installed or not in PATH; OCR disabled for this run. "
                "Scanned pages will produce no text."
            )
            return PageOcrResult(page_index=page_index, status=OcrStatus.OCR_SKIPPED, text=fallback_text)
        return PageOcrResult(
            page_index=page_index,
            status=OcrStatus.OCR_FAILED,
            text=fallback_text,
            reason=str(exc),
        )

    _tesseract_available = True

    if not ocr_text:
        return PageOcrResult(
            page_index=page_index,
            status=OcrStatus.OCR_EMPTY,
            text=fallback_text,
            reason="Tesseract returned empty output",
        )
    return PageOcrResult(page_index=page_index, status=OcrStatus.OCR_SUCCESS, text=ocr_text)


def extract_page_text(
    page: pymupdf.Page,
    page_index: int,
    *,
    settings: OcrSettings | None = None,
) -> PageOcrResult:
    """Return text for one PDF page, running OCR when the text layer is thin.

    Parameters
    ----------
    page:
        An open ``pymupdf.Page`` object.
    page_index:
        1-based page number (for diagnostic messages).
    settings:
        Rendering and OCR settings; defaults apply when omitted.
    """
    settings = settings or OcrSettings()
    embedded_text = page.get_text("text")

    if not _is_scanned_page(page, embedded_text, threshold=settings.coverage_threshold):
        return PageOcrResult(page_index=page_index, status=OcrStatus.EMBEDDED, text=embedded_text)

    return _run_ocr(lambda: _ocr_page(page, settings), page_index, embedded_text)


def extract_image_text(
    image: "Image.Image",
    page_index: int,
    *,
    settings: OcrSettings | None = None,
) -> PageOcrResult:
    """OCR one raster page (a photo or scan loaded with Pillow)."""
    settings = settings or OcrSettings()
    return _run_ocr(lambda: _ocr_image(image, settings), page_index, "")
