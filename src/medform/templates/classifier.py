"""Keyword-based template classifier using a ranked JSON rule list."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from medform.models import TemplateKind

_RULES_PATH = Path(__file__).parent / "template_rules.json"


@dataclass(frozen=True, slots=True)
class TemplateRule:
    template: TemplateKind
    keywords: tuple[str, ...]

    def matches(self, folded_text: str) -> bool:
        return any(keyword.casefold() in folded_text for keyword in self.keywords)


@lru_cache(maxsize=1)
def load_rules() -> tuple[TemplateRule, ...]:
    """Return the packaged rules in evaluation order."""

    data = json.loads(_RULES_PATH.read_text(encoding="utf-8"))
    return tuple(
        TemplateRule(
            template=TemplateKind(rule["template"]),
            keywords=tuple(rule["keywords"]),
        )
        for rule in data["rules"]
    )


def classify_template(text: str, rules: Sequence[TemplateRule] | None = None) -> TemplateKind:
    """Return the template of the first rule with a keyword present in ``text``.

    Matching is a case-folded substring test with no scoring, so rule order
    decides ties: a handover sheet that also mentions a signature stays a
    handover sheet.
    """

    if not text or not text.strip():
        return TemplateKind.UNKNOWN

    folded = text.casefold()
    for rule in load_rules() if rules is None else rules:
        if rule.matches(folded):
            return rule.template
    return TemplateKind.UNKNOWN
