"""Tests for the keyword-based template classifier."""

from __future__ import annotations

from medform.models import TemplateKind
from medform.templates.classifier import TemplateRule, classify_template, load_rules


# ---------------------------------------------------------------------------
# Packaged rules
# ---------------------------------------------------------------------------

def test_packaged_rules_rank_handover_before_consent() -> None:
    rules = load_rules()
    assert [rule.template for rule in rules] == [TemplateKind.HANDOVER, TemplateKind.CONSENT]
    assert "patient condition" in rules[0].keywords
    assert "uhid" in rules[1].keywords


# ---------------------------------------------------------------------------
# Decision rule
# ---------------------------------------------------------------------------

def test_handover_keyword_wins_over_consent_keyword() -> None:
    text = "NURSING HANDOVER SHEET\nSignature of staff nurse"
    assert classify_template(text) is TemplateKind.HANDOVER


def test_each_handover_keyword_is_sufficient() -> None:
    assert classify_template("Patient was handed over to ICU") is TemplateKind.HANDOVER
    assert classify_template("PATIENT CONDITION: stable") is TemplateKind.HANDOVER


def test_relative_alone_classifies_as_consent() -> None:
    assert classify_template("Name of Relative: Mary") is TemplateKind.CONSENT


def test_uhid_alone_classifies_as_consent() -> None:
    assert classify_template("UHID 12345") is TemplateKind.CONSENT


def test_text_without_keywords_is_unknown() -> None:
    assert classify_template("Discharge summary\nBP 120/80") is TemplateKind.UNKNOWN
    assert classify_template("") is TemplateKind.UNKNOWN


def test_custom_rules_are_evaluated_in_given_order() -> None:
    rules = [
        TemplateRule(template=TemplateKind.CONSENT, keywords=("Signature",)),
        TemplateRule(template=TemplateKind.HANDOVER, keywords=("handover sheet",)),
    ]
    text = "Handover Sheet with Signature"
    assert classify_template(text, rules) is TemplateKind.CONSENT
