"""Schema for nursing handover sheets (SBAR layout)."""

from __future__ import annotations

from medform.extraction.schema import FieldGroup, FieldSpec, FormSchema, parse_form, patterns
from medform.extraction.strategies import STRUCTURAL_CHAIN
from medform.models import FieldMap

CONSCIOUS_DEFAULT = "Conscious / Oriented"


def _labelled(
    name: str,
    label: str | tuple[str, ...],
    *sources: str,
    default: tuple[str, str] | None = None,
) -> FieldSpec:
    labels = (label,) if isinstance(label, str) else label
    return FieldSpec(
        name=name,
        labels=labels,
        patterns=patterns(*sources),
        chain=STRUCTURAL_CHAIN,
        default=default,
    )


# Vitals are written inline ("BP 120/80, PR 78"), so they skip the layout strategies.
VITALS = FieldGroup(
    name="vitals",
    fields=(
        FieldSpec(
            name="bp",
            patterns=patterns(
                r"(?:BP|Blood\s*Pressure)[^\d]*(\d{2,3}/\d{2,3})",
                r"BP[:\s]*([^,\n]+)",
            ),
        ),
        FieldSpec(name="pulse", patterns=patterns(r"Pulse[:\s]*([0-9]{2,3})", r"\bPR[:\s]*([0-9]{2,3})")),
        FieldSpec(name="temperature", patterns=patterns(r"Temp(?:erature)?[:\s]*([0-9]{2,3}\.?[0-9]?)")),
        FieldSpec(
            name="rr",
            patterns=patterns(r"\bRR[:\s]*([0-9]{2,3})", r"Respiratory\s*Rate[:\s]*([0-9]{1,3})"),
        ),
        FieldSpec(name="spo2", patterns=patterns(r"SP[O0]2[:\s]*([0-9]{2,3})")),
    ),
)

HANDOVER_SCHEMA = FormSchema(
    name="handover",
    entries=(
        _labelled("patient_name", "Patient Name", r"Patient\s*Name[:.\s\-]*([A-Za-z0-9 ,.'\-/]+)"),
        _labelled(
            "uhid",
            "UHID",
            r"UHID[^:\n]*[:\s]*([A-Za-z0-9\-/]+)",
            r"UHID\s*No[^:\n]*[:\s]*([A-Za-z0-9\-/]+)",
        ),
        _labelled(
            "date_of_admission",
            "Date of Admission",
            r"Date\s*of\s*Admission[:\s]*([A-Za-z0-9/\-: ]{3,30})",
        ),
        _labelled("date_of_surgery", "Date of Surgery", r"Date\s*of\s*Surgery[:\s]*([A-Za-z0-9/\-: ]{3,30})"),
        _labelled("time", "Time", r"Time[:\s]*([0-2]?[0-9]:?[0-5]?[0-9]?)"),
        _labelled("age", "Age", r"Age[:\s]*([0-9]{1,3})"),
        _labelled("surgery_name", "Surgery Name", r"Surgery\s*Name[:\s]*(.+?)(?:\n|$)"),
        _labelled(
            "patient_condition",
            "Patient Condition",
            r"Patient\s*Condition[:\s]*(.+?)(?:\n|$)",
            default=("conscious", CONSCIOUS_DEFAULT),
        ),
        _labelled(
            "allergies",
            "Allergies",
            r"Allerg(?:y|ies)[^:\n]*[:\s]*([^,\n]+)",
            r"If any[^:\n]*[:\s]*([^,\n]+)",
        ),
        _labelled(
            "diabetic_diet",
            ("Diabetic Diet", "Diet"),
            r"Diabetic[^:\n]*[:\s]*([A-Za-z0-9/ ]+)",
            r"Diet[:\s]*([A-Za-z0-9/ ]+)",
        ),
        _labelled("medication_given", "Medication Given", r"Medication\s*Given[:\s]*([^,\n]+)"),
        VITALS,
        _labelled("foleys_catheter", "Foleys Catheter", r"Foley(?:'?s)?\s*Catheter[:\s]*([A-Za-z0-9/ ]+)"),
        _labelled("iv_fluids", "IV Fluids", r"IV\s*Fluids[:\s]*([A-Za-z0-9/ ]+)"),
        _labelled("blood_transfusion", "Blood Transfusion", r"Blood\s*Transfusion[:\s]*([A-Za-z0-9/ ]+)"),
        _labelled("wound_site", "Wound Site", r"Wound\s*Site[:\s]*([A-Za-z0-9/ ]+)"),
        _labelled(
            "recommendation",
            "Recommendation",
            r"Recommendations?:[:\s]*([A-Za-z0-9\-.,/ ]+)",
            r"Any\s*changes\s*/\s*plan\s*in\s*the\s*treatment[:\s]*([A-Za-z0-9\-.,/ ]+)",
        ),
    ),
)


def parse_handover(text: str | None) -> FieldMap:
    """Extract the handover field map; unmatched fields map to ``None``."""

    return parse_form(HANDOVER_SCHEMA, text)
