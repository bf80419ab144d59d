"""Input format adapters and their shared contract."""

import logging

from .base import PageSourceAdapter

logger = logging.getLogger(__name__)

try:
    from .pdf_adapter import PDFAdapter
except ImportError:
    PDFAdapter = None
    logger.warning("PDF support unavailable: install 'pymupdf'")

try:
    from .image_adapter import ImageAdapter
except ImportError:
    ImageAdapter = None
    logger.warning("Image support unavailable: install 'Pillow'")

try:
    from .txt_adapter import TXTAdapter
except ImportError:
    TXTAdapter = None
    logger.warning("TXT support unavailable: install 'charset-normalizer'")


def build_default_adapters() -> dict[str, PageSourceAdapter]:
    """Return the default adapter map, most specific formats first."""
    adapters: dict[str, PageSourceAdapter] = {}
    if PDFAdapter is not None:
        adapters["pdf"] = PDFAdapter()
    if ImageAdapter is not None:
        adapters["image"] = ImageAdapter()
    if TXTAdapter is not None:
        adapters["txt"] = TXTAdapter()
    return adapters


__all__ = [
    "ImageAdapter",
    "PDFAdapter",
    "PageSourceAdapter",
    "TXTAdapter",
    "build_default_adapters",
]
