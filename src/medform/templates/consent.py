"""Schema for admission consent forms.

Consent forms read like prose rather than a table, so every field is located
with regex patterns over the whole normalized text.
"""

from __future__ import annotations

import re
from typing import Sequence

from medform.extraction.schema import FieldSpec, FormSchema, parse_form, patterns
from medform.models import FieldMap

_LETTER_RE = re.compile(r"[A-Za-z]")

MAX_NAME_LINE_CHARS = 60


def first_name_like_line(text: str, lines: Sequence[str]) -> str | None:
    """Return the first line that looks like a person's name.

    The line needs two or more tokens, at least one letter, fewer than 60
    characters, and must not be a "patient" label line.
    """

    for line in lines:
        if (
            len(line.split(" ")) >= 2
            and _LETTER_RE.search(line)
            and len(line) < MAX_NAME_LINE_CHARS
            and "patient" not in line.casefold()
        ):
            return line
    return None


_UHID_PATTERNS = (
    r"UHID[^:\n]*[:\s]*([A-Za-z0-9\-/]+)",
    r"UHID\s*No[:\s]*([A-Za-z0-9\-/]+)",
)

CONSENT_SCHEMA = FormSchema(
    name="consent",
    entries=(
        FieldSpec(
            name="patient_name",
            patterns=patterns(
                r"Patient\s*Name[:.\s\-_]+([A-Za-z0-9 ,'\-/]+)",
                r"Name[:\s]+([A-Za-z0-9 ,'\-/]+)",
            ),
            fallback=first_name_like_line,
        ),
        FieldSpec(
            name="relative_name",
            patterns=patterns(
                r"Relative(?:'s)?\s*Name[:\s]*([A-Za-z0-9 ,'\-/]+)",
                r"Relative[:\s]*([A-Za-z0-9 ,'\-/]+)",
            ),
        ),
        FieldSpec(
            name="relative_contact",
            patterns=patterns(r"Contact(?:\s*No\.?|\s*number)?[:\s]*([0-9\-+ ]{6,})"),
        ),
        # Usually a handwritten mark; whatever OCR reads after the label is kept as is.
        FieldSpec(name="signature", patterns=patterns(r"Signature[:\s]*([A-Za-z0-9 ,'\-/]+)")),
        FieldSpec(name="uhid", patterns=patterns(*_UHID_PATTERNS)),
        FieldSpec(
            name="date",
            patterns=patterns(
                r"Date[:\s]*([0-3]?\d[/\-.\s][0-1]?\d[/\-.\s][0-9]{2,4})",
                r"Date\s*of\s*Admission[:\s]*([A-Za-z0-9/\- ]+)",
            ),
        ),
        FieldSpec(name="weight", patterns=patterns(r"Weight[:\s]*([0-9]{2,3}\.?[0-9]?)")),
        FieldSpec(name="bmi", patterns=patterns(r"BMI[:\s]*([0-9]{1,3}\.?[0-9]?)")),
        FieldSpec(name="pulse", patterns=patterns(r"Pulse[:\s]*([0-9]{2,3})")),
        FieldSpec(name="bp", patterns=patterns(r"(?:BP|Blood\s*Pressure)[:\s]*([0-9]{2,3}/[0-9]{2,3})")),
        FieldSpec(name="temp", patterns=patterns(r"Temp(?:erature)?[:\s]*([0-9]{2,3}\.?[0-9]?)")),
        FieldSpec(name="rr", patterns=patterns(r"\bRR[:\s]*([0-9]{1,3})")),
        FieldSpec(name="spo2", patterns=patterns(r"SP[O0]2[:\s]*([0-9]{2,3})")),
        FieldSpec(name="diagnosis", patterns=patterns(r"Diagnosis[:\s]*([A-Za-z0-9, \-()/]+)")),
        FieldSpec(
            name="treatment",
            patterns=patterns(r"Treatment[:\s]*([A-Za-z0-9,\- ]+)", r"Plan[:\s]*([A-Za-z0-9,\- ]+)"),
        ),
    ),
)


def parse_consent(text: str | None) -> FieldMap:
    """Extract the consent field map; unmatched fields map to ``None``."""

    return parse_form(CONSENT_SCHEMA, text)
