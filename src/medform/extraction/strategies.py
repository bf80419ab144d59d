"""Label-anchored value extraction strategies.

Every strategy shares the ``(text, label) -> str | None`` shape so that schema
parsers can chain them.  Patterns used by :func:`extract_by_regex_list` must
carry exactly one capture group; the first pattern that matches wins, so
callers order them from most specific to most general.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, Sequence

from medform.text.normalization import split_lines

Strategy = Callable[[str, str], Optional[str]]

MAX_VALUE_CHARS = 120

# "Label ........ Value" or "Label      Value"
_DOT_LEADER_GAP_RE = re.compile(r"\.{3,}|\s{4,}")
_TWO_COLUMN_GAP_RE = re.compile(r"\.{3,}|\s{6,}")


def _compile(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, re.IGNORECASE)


def extract_by_regex_list(text: str, patterns: Iterable[str | re.Pattern[str]]) -> str | None:
    """Return the trimmed first group of the first matching pattern.

    String patterns are compiled case-insensitively; compiled patterns are
    used with their own flags.  A capture that is blank after trimming does
    not count as a match.
    """

    if not text:
        return None

    for pattern in patterns:
        match = _compile(pattern).search(text)
        if match is None:
            continue
        captured = match.group(1)
        if captured and captured.strip():
            return captured.strip()
    return None


def _split_labelled_line(line: str, label: str, gap_re: re.Pattern[str]) -> str | None:
    parts = [part.strip() for part in gap_re.split(line)]
    parts = [part for part in parts if part]
    if len(parts) != 2:
        return None

    folded_label = label.casefold()
    first, second = parts
    if folded_label in first.casefold():
        return second
    if folded_label in second.casefold():
        return first
    return None


def _scan_lines(text: str, label: str, gap_re: re.Pattern[str]) -> str | None:
    folded_label = label.casefold()
    for line in split_lines(text):
        if folded_label not in line.casefold():
            continue
        value = _split_labelled_line(line, label, gap_re)
        if value:
            return value
    return None


def dot_leader_extract(text: str, label: str) -> str | None:
    """Find the value printed after ``label`` across a dot leader or gap.

    A direct match of the label followed by separator characters is tried
    first; otherwise lines containing the label are split on long dot runs or
    wide whitespace and the non-label half is returned.
    """

    if not text or not label:
        return None

    direct = re.compile(
        re.escape(label) + r"[\s.:_\-]+([^\n]{1," + str(MAX_VALUE_CHARS) + r"})",
        re.IGNORECASE,
    )
    match = direct.search(text)
    if match is not None and match.group(1).strip():
        return match.group(1).strip()

    return _scan_lines(text, label, _DOT_LEADER_GAP_RE)


def two_column_extract(text: str, label: str) -> str | None:
    """Split column-aligned lines (6+ spaces or a dot run) around ``label``."""

    if not text or not label:
        return None
    return _scan_lines(text, label, _TWO_COLUMN_GAP_RE)


STRUCTURAL_CHAIN: tuple[Strategy, ...] = (dot_leader_extract, two_column_extract)


def pick(
    text: str,
    labels: str | Sequence[str],
    patterns: Iterable[str | re.Pattern[str]] = (),
    *,
    chain: Sequence[Strategy] = STRUCTURAL_CHAIN,
) -> str | None:
    """Run the layout-aware strategies, then the regex fallbacks.

    With several alternative labels, each strategy is tried for every label
    before the next strategy runs.
    """

    label_list = (labels,) if isinstance(labels, str) else tuple(labels)
    for strategy in chain:
        for label in label_list:
            value = strategy(text, label)
            if value:
                return value
    return extract_by_regex_list(text, patterns)
