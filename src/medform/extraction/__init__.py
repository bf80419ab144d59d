"""Field extraction strategies and declarative schemas."""

from .schema import FieldGroup, FieldSpec, FormSchema, extract_field, parse_form, patterns
from .strategies import (
    STRUCTURAL_CHAIN,
    dot_leader_extract,
    extract_by_regex_list,
    pick,
    two_column_extract,
)

__all__ = [
    "FieldGroup",
    "FieldSpec",
    "FormSchema",
    "STRUCTURAL_CHAIN",
    "dot_leader_extract",
    "extract_by_regex_list",
    "extract_field",
    "parse_form",
    "patterns",
    "pick",
    "two_column_extract",
]
