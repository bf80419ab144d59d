"""Per-document orchestration: normalize, classify, parse.

Everything here is synchronous and free of I/O.  Page texts come from an
OCR collaborator (see :mod:`medform.ingestion`) and field maps go to whatever
serializes them.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from medform.models import ExtractionResult, FieldMap, RawTranscript, TemplateKind
from medform.templates import PARSERS, classify_template
from medform.text.normalization import normalize_text

logger = logging.getLogger(__name__)

NO_PAGES_ERROR = "no pages"
NO_TEXT_ERROR = "no extractable text"


def join_pages(pages: Sequence[str]) -> str:
    """Concatenate page texts in rendering order."""

    return "\n".join(page or "" for page in pages)


def extract_fields(
    full_text: str,
    *,
    template: TemplateKind | None = None,
) -> tuple[TemplateKind, FieldMap]:
    """Classify ``full_text`` (unless ``template`` is forced) and parse it.

    An unknown template runs every known parser and returns their maps keyed
    by template name, leaving the choice to the caller.
    """

    normalized = normalize_text(full_text)
    kind = template if template is not None else classify_template(normalized)

    if kind is TemplateKind.UNKNOWN:
        fields: FieldMap = {known.value: parser(normalized) for known, parser in PARSERS.items()}
    else:
        fields = PARSERS[kind](normalized)
    return kind, fields


def process_document(
    transcript: RawTranscript,
    *,
    template: TemplateKind | None = None,
) -> ExtractionResult:
    """Extract one document; missing input is reported, not raised."""

    if not transcript.pages:
        logger.warning("No pages for %s", transcript.file_name)
        return ExtractionResult.failed(transcript.file_name, NO_PAGES_ERROR)

    normalized = normalize_text(join_pages(transcript.pages))
    if not normalized:
        logger.warning("No extractable text in %s", transcript.file_name)
        return ExtractionResult.failed(transcript.file_name, NO_TEXT_ERROR)

    kind, fields = extract_fields(normalized, template=template)
    logger.info("Extracted %s as %s template", transcript.file_name, kind.value)
    return ExtractionResult(file_name=transcript.file_name, template=kind, fields=fields, text=normalized)


def process_batch(
    transcripts: Iterable[RawTranscript],
    *,
    template: TemplateKind | None = None,
) -> list[ExtractionResult]:
    """Extract documents in order; one failing document never stops the rest."""

    results: list[ExtractionResult] = []
    for transcript in transcripts:
        try:
            results.append(process_document(transcript, template=template))
        except Exception as exc:
            logger.exception("Extraction failed for %s", transcript.file_name)
            results.append(ExtractionResult.failed(transcript.file_name, str(exc) or type(exc).__name__))
    return results
