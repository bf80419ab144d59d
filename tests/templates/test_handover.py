from __future__ import annotations

from medform.templates.handover import CONSCIOUS_DEFAULT, HANDOVER_SCHEMA, parse_handover

_SHEET = """NURSING HANDOVER SHEET
I (Identification)
Patient Name ............ Ravi Kumar
UHID ........ MH-20231
Age ...... 54
Date of Admission : 12/03/2024
S (Situation)
Surgery Name: Laparoscopic Cholecystectomy
Patient Condition ...... Stable
B (Background)
Allergies: None known
Medication Given: Inj Ceftriaxone 1g
A (Assessment)
BP 130/84, PR 88, Temp 98.6, RR 18, SPO2 97%
Wound Site ..... Clean and dry
R (Recommendation)
Recommendation: Continue IV antibiotics
"""


def test_handover_field_map_follows_schema_order() -> None:
    fields = parse_handover(_SHEET)

    assert list(fields) == [
        "patient_name",
        "uhid",
        "date_of_admission",
        "date_of_surgery",
        "time",
        "age",
        "surgery_name",
        "patient_condition",
        "allergies",
        "diabetic_diet",
        "medication_given",
        "vitals",
        "foleys_catheter",
        "iv_fluids",
        "blood_transfusion",
        "wound_site",
        "recommendation",
    ]
    assert list(fields) == HANDOVER_SCHEMA.field_names
    assert list(fields["vitals"]) == ["bp", "pulse", "temperature", "rr", "spo2"]


def test_handover_reads_dot_leader_fields() -> None:
    fields = parse_handover(_SHEET)

    assert fields["patient_name"] == "Ravi Kumar"
    assert fields["uhid"] == "MH-20231"
    assert fields["age"] == "54"
    assert fields["date_of_admission"] == "12/03/2024"
    assert fields["surgery_name"] == "Laparoscopic Cholecystectomy"
    assert fields["patient_condition"] == "Stable"
    assert fields["allergies"] == "None known"
    assert fields["medication_given"] == "Inj Ceftriaxone 1g"
    assert fields["wound_site"] == "Clean and dry"
    assert fields["recommendation"] == "Continue IV antibiotics"


def test_handover_reads_inline_vitals() -> None:
    vitals = parse_handover(_SHEET)["vitals"]

    assert vitals == {
        "bp": "130/84",
        "pulse": "88",
        "temperature": "98.6",
        "rr": "18",
        "spo2": "97",
    }


def test_handover_missing_fields_are_none() -> None:
    fields = parse_handover(_SHEET)

    assert fields["date_of_surgery"] is None
    assert fields["foleys_catheter"] is None
    assert fields["blood_transfusion"] is None
    assert fields["diabetic_diet"] is None


def test_patient_condition_defaults_when_conscious_is_mentioned() -> None:
    fields = parse_handover("Handed over to ward.\nPatient is conscious and responding.")
    assert fields["patient_condition"] == CONSCIOUS_DEFAULT == "Conscious / Oriented"


def test_patient_condition_stays_none_without_hint() -> None:
    assert parse_handover("Handed over to ward.")["patient_condition"] is None


def test_diabetic_diet_label_variants() -> None:
    assert parse_handover("Diabetic Diet: Yes")["diabetic_diet"] == "Yes"
    assert parse_handover("Diet ...... Soft")["diabetic_diet"] == "Soft"
    assert parse_handover("Diabetic: No")["diabetic_diet"] == "No"


def test_pulse_reads_full_label_before_abbreviation() -> None:
    vitals = parse_handover("PR 70\nPulse: 92")["vitals"]
    assert vitals["pulse"] == "92"


def test_blood_pressure_spelled_out() -> None:
    vitals = parse_handover("Blood Pressure - 110/70 mmHg")["vitals"]
    assert vitals["bp"] == "110/70"


def test_handover_on_empty_text_yields_all_none() -> None:
    fields = parse_handover(None)

    assert fields["vitals"] == {"bp": None, "pulse": None, "temperature": None, "rr": None, "spo2": None}
    assert all(value is None for key, value in fields.items() if key != "vitals")
