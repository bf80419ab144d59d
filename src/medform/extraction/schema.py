"""Declarative form schemas and the generic runner that fills them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union

from medform.extraction.strategies import Strategy, extract_by_regex_list, pick
from medform.models import FieldMap
from medform.text.normalization import normalize_text, split_lines

logger = logging.getLogger(__name__)

LineFallback = Callable[[str, Sequence[str]], Optional[str]]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """How to locate one field.

    ``chain`` lists the layout-aware strategies tried with ``labels`` before
    the regex ``patterns``.  ``fallback`` receives the normalized text and its
    lines when nothing else matched.  ``default`` is a ``(keyword, value)``
    pair used last, when the case-folded text contains the keyword.
    """

    name: str
    labels: tuple[str, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()
    chain: tuple[Strategy, ...] = ()
    fallback: LineFallback | None = None
    default: tuple[str, str] | None = None


@dataclass(frozen=True, slots=True)
class FieldGroup:
    """Nested sub-map such as the vitals block."""

    name: str
    fields: tuple[FieldSpec, ...]


SchemaEntry = Union[FieldSpec, FieldGroup]


@dataclass(frozen=True, slots=True)
class FormSchema:
    name: str
    entries: tuple[SchemaEntry, ...] = field(default_factory=tuple)

    @property
    def field_names(self) -> list[str]:
        return [entry.name for entry in self.entries]


def patterns(*sources: str) -> tuple[re.Pattern[str], ...]:
    """Compile case-insensitive single-group patterns in priority order."""

    compiled = tuple(re.compile(source, re.IGNORECASE) for source in sources)
    for pattern in compiled:
        if pattern.groups != 1:
            raise ValueError(f"Pattern must have exactly one capture group: {pattern.pattern}")
    return compiled


def extract_field(field_spec: FieldSpec, text: str, lines: Sequence[str]) -> str | None:
    """Resolve one field against already normalized text."""

    if field_spec.chain and field_spec.labels:
        value = pick(text, field_spec.labels, field_spec.patterns, chain=field_spec.chain)
    else:
        value = extract_by_regex_list(text, field_spec.patterns)

    if value is None and field_spec.fallback is not None:
        value = field_spec.fallback(text, lines)

    if value is None and field_spec.default is not None:
        keyword, default_value = field_spec.default
        if keyword.casefold() in text.casefold():
            value = default_value

    if value is None:
        logger.debug("No value found for field %s", field_spec.name)
    return value


def parse_form(schema: FormSchema, text: str | None) -> FieldMap:
    """Fill every declared field of ``schema`` from ``text``.

    Missing fields are kept with a ``None`` value; key order follows the
    declaration order of the schema.
    """

    normalized = normalize_text(text)
    lines = split_lines(normalized)

    out: FieldMap = {}
    for entry in schema.entries:
        if isinstance(entry, FieldGroup):
            out[entry.name] = {field_spec.name: extract_field(field_spec, normalized, lines) for field_spec in entry.fields}
        else:
            out[entry.name] = extract_field(entry, normalized, lines)
    return out
