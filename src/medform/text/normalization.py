"""Canonicalization helpers for raw OCR transcripts."""

from __future__ import annotations

import re

# OCR tends to read dot leaders as bullets or middle dots.
_BULLET_GLYPHS_RE = re.compile("[\u2022\u2024\u00b7\u2219]")
_INLINE_WHITESPACE_RE = re.compile(r"[^\S\n]+")
# Adjacent spaces are swallowed so a second pass yields the same token.
_DOT_RUN_RE = re.compile(r"[^\S\n]*\.{2,}[^\S\n]*")
_LINE_BREAKS_RE = re.compile(r"\n+")

DOT_LEADER_TOKEN = " ... "


def normalize_text(text: str | None) -> str:
    """Return the canonical form of an OCR transcript.

    Steps run in a fixed order: carriage returns become newlines, tabs and
    non-breaking spaces become spaces, bullet glyphs become periods, inline
    whitespace runs collapse to one space, period runs collapse to the
    ``" ... "`` token and the result is trimmed. Applying the function to its
    own output returns the same string.
    """

    if not text:
        return ""

    normalized = text.replace("\r", "\n")
    normalized = normalized.replace("\t", " ")
    normalized = normalized.replace("\u00a0", " ")
    normalized = _BULLET_GLYPHS_RE.sub(".", normalized)
    normalized = _INLINE_WHITESPACE_RE.sub(" ", normalized)
    normalized = _DOT_RUN_RE.sub(DOT_LEADER_TOKEN, normalized)
    return normalized.strip()


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines in source order."""

    if not text:
        return []
    segments = (segment.strip() for segment in _LINE_BREAKS_RE.split(text))
    return [segment for segment in segments if segment]
