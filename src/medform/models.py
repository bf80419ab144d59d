"""Data structures shared by classification, parsing and orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

FieldValue = Union[str, None, Dict[str, Any]]
FieldMap = Dict[str, FieldValue]


class TemplateKind(Enum):
    HANDOVER = "handover"
    CONSENT = "consent"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class RawTranscript:
    """Per-page OCR output for one input file, in rendering order."""

    file_name: str
    pages: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ExtractionResult:
    """Outcome of extracting one document.

    Failed documents carry ``error`` and no field map; successful ones carry
    the template, the field map and the normalized text for display.
    """

    file_name: str
    template: TemplateKind | None = None
    fields: FieldMap | None = None
    text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, file_name: str, error: str) -> "ExtractionResult":
        return cls(file_name=file_name, error=error)

    def to_dict(self, *, include_text: bool = True) -> dict[str, Any]:
        if self.error is not None:
            return {"file_name": self.file_name, "error": self.error}

        payload: dict[str, Any] = {
            "file_name": self.file_name,
            "template": self.template.value if self.template else None,
            "fields": self.fields,
        }
        if include_text:
            payload["text"] = self.text
        return payload
