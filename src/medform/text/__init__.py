"""Text canonicalization for OCR transcripts."""

from .normalization import DOT_LEADER_TOKEN, normalize_text, split_lines

__all__ = ["DOT_LEADER_TOKEN", "normalize_text", "split_lines"]
