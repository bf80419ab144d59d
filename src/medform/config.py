"""Runtime configuration for rendering and OCR collaborators."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_OCR_LANG = "eng"
DEFAULT_OCR_CONFIG = ""
DEFAULT_RENDER_SCALE = 2.0
DEFAULT_UPSCALE = 2.0
DEFAULT_THRESHOLD_MIN = 120
DEFAULT_THRESHOLD_MAX = 180
DEFAULT_THRESHOLD_OFFSET = 10
# chars / pt²; an A4 page needs roughly 500 embedded characters to skip OCR.
DEFAULT_COVERAGE_THRESHOLD = 0.001


def _parse_int(*, name: str, raw_value: str, minimum: int = 0, maximum: int | None = None) -> int:
    value = int(raw_value)
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{name} must be <= {maximum}")
    return value


def _parse_float(*, name: str, raw_value: str, minimum: float) -> float:
    value = float(raw_value)
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class OcrSettings:
    """Validated settings for page rendering, binarization and Tesseract."""

    lang: str = DEFAULT_OCR_LANG
    tesseract_config: str = DEFAULT_OCR_CONFIG
    render_scale: float = DEFAULT_RENDER_SCALE
    upscale: float = DEFAULT_UPSCALE
    threshold_min: int = DEFAULT_THRESHOLD_MIN
    threshold_max: int = DEFAULT_THRESHOLD_MAX
    threshold_offset: int = DEFAULT_THRESHOLD_OFFSET
    coverage_threshold: float = DEFAULT_COVERAGE_THRESHOLD

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "OcrSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        lang = source.get("MEDFORM_OCR_LANG", DEFAULT_OCR_LANG).strip()
        if not lang:
            raise ValueError("MEDFORM_OCR_LANG cannot be empty")
        tesseract_config = source.get("MEDFORM_OCR_CONFIG", DEFAULT_OCR_CONFIG).strip()

        render_scale = _parse_float(
            name="MEDFORM_RENDER_SCALE",
            raw_value=source.get("MEDFORM_RENDER_SCALE", str(DEFAULT_RENDER_SCALE)).strip(),
            minimum=0.5,
        )
        upscale = _parse_float(
            name="MEDFORM_UPSCALE",
            raw_value=source.get("MEDFORM_UPSCALE", str(DEFAULT_UPSCALE)).strip(),
            minimum=1.0,
        )
        threshold_min = _parse_int(
            name="MEDFORM_THRESHOLD_MIN",
            raw_value=source.get("MEDFORM_THRESHOLD_MIN", str(DEFAULT_THRESHOLD_MIN)).strip(),
            maximum=255,
        )
        threshold_max = _parse_int(
            name="MEDFORM_THRESHOLD_MAX",
            raw_value=source.get("MEDFORM_THRESHOLD_MAX", str(DEFAULT_THRESHOLD_MAX)).strip(),
            maximum=255,
        )
        threshold_offset = _parse_int(
            name="MEDFORM_THRESHOLD_OFFSET",
            raw_value=source.get("MEDFORM_THRESHOLD_OFFSET", str(DEFAULT_THRESHOLD_OFFSET)).strip(),
            maximum=255,
        )
        coverage_threshold = _parse_float(
            name="MEDFORM_COVERAGE_THRESHOLD",
            raw_value=source.get("MEDFORM_COVERAGE_THRESHOLD", str(DEFAULT_COVERAGE_THRESHOLD)).strip(),
            minimum=0.0,
        )

        if threshold_min > threshold_max:
            raise ValueError("MEDFORM_THRESHOLD_MIN must be <= MEDFORM_THRESHOLD_MAX")

        return cls(
            lang=lang,
            tesseract_config=tesseract_config,
            render_scale=render_scale,
            upscale=upscale,
            threshold_min=threshold_min,
            threshold_max=threshold_max,
            threshold_offset=threshold_offset,
            coverage_threshold=coverage_threshold,
        )
