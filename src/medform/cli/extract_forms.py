"""CLI command that extracts field maps from scanned hospital forms."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from medform.config import OcrSettings
from medform.ingestion.adapters import build_default_adapters
from medform.ingestion.transcriber import Transcriber, TranscriptionError
from medform.models import ExtractionResult, RawTranscript, TemplateKind
from medform.pipeline import process_batch


load_dotenv()

LOGGER = logging.getLogger(__name__)

_SUPPORTED_SUFFIXES = {".pdf", ".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".gif", ".webp", ".txt"}
_TEMPLATE_CHOICES = ("auto", TemplateKind.HANDOVER.value, TemplateKind.CONSENT.value)


def _collect_inputs(target: Path) -> list[Path]:
    if target.is_file():
        return [target]
    if target.is_dir():
        return sorted(
            path for path in target.rglob("*") if path.is_file() and path.suffix.lower() in _SUPPORTED_SUFFIXES
        )
    return []


def _build_transcriber(settings: OcrSettings) -> Transcriber:
    transcriber = Transcriber(settings)
    for name, adapter in build_default_adapters().items():
        transcriber.register_adapter(name, adapter)
    return transcriber


def _output_path(output_dir: Path, source_root: Path, file_path: Path) -> Path:
    # Outputs mirror the input tree below --path.
    relative = file_path.relative_to(source_root) if source_root.is_dir() else Path(file_path.name)
    return output_dir / relative.parent / f"{relative.name}_fields.json"


def _write_fields(target: Path, result: ExtractionResult) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(result.fields, ensure_ascii=False, indent=2), encoding="utf-8")
    return target


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract structured fields from scanned handover and consent forms")
    parser.add_argument("--path", required=True, help="Source file or directory (PDF, image or OCR text)")
    parser.add_argument(
        "--template",
        choices=_TEMPLATE_CHOICES,
        default="auto",
        help="Force a template instead of detecting it",
    )
    parser.add_argument("--output-dir", default=None, help="Write <file name>_fields.json per document here")
    parser.add_argument("--include-text", action="store_true", help="Include normalized text in the JSON output")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    level = getattr(logging, args.log_level.upper(), None)
    if not isinstance(level, int):
        LOGGER.error("Invalid --log-level: %s", args.log_level)
        return 2
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    source_path = Path(args.path)
    if not source_path.exists():
        LOGGER.error("path does not exist: %s", source_path)
        return 2

    template = None if args.template == "auto" else TemplateKind(args.template)
    output_dir = Path(args.output_dir) if args.output_dir else None
    try:
        settings = OcrSettings.from_env()
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 2
    transcriber = _build_transcriber(settings)

    results: list[dict[str, object]] = []
    errors: list[dict[str, str]] = []

    transcripts: list[RawTranscript] = []
    sources: list[Path] = []
    for file_path in _collect_inputs(source_path):
        try:
            transcripts.append(transcriber.transcribe(file_path).to_raw())
            sources.append(file_path)
        except TranscriptionError as exc:
            LOGGER.warning("Skipping %s: %s", file_path, exc)
            errors.append({"file_name": file_path.name, "error": str(exc)})

    for file_path, result in zip(sources, process_batch(transcripts, template=template)):
        if not result.ok:
            errors.append(result.to_dict())
            continue

        entry = result.to_dict(include_text=args.include_text)
        if output_dir is not None:
            entry["output_file"] = str(_write_fields(_output_path(output_dir, source_path, file_path), result))
        results.append(entry)

    payload = {
        "path": str(source_path),
        "processed": len(results),
        "results": results,
        "errors": errors,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
