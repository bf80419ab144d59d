"""Known form templates: classification rules and per-template schemas."""

from __future__ import annotations

from typing import Callable

from medform.models import FieldMap, TemplateKind

from .classifier import TemplateRule, classify_template, load_rules
from .consent import CONSENT_SCHEMA, parse_consent
from .handover import HANDOVER_SCHEMA, parse_handover

# Order matters: the unknown-template dual result lists parsers in this order.
PARSERS: dict[TemplateKind, Callable[[str], FieldMap]] = {
    TemplateKind.HANDOVER: parse_handover,
    TemplateKind.CONSENT: parse_consent,
}

__all__ = [
    "CONSENT_SCHEMA",
    "HANDOVER_SCHEMA",
    "PARSERS",
    "TemplateRule",
    "classify_template",
    "load_rules",
    "parse_consent",
    "parse_handover",
]
