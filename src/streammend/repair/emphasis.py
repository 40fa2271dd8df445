"""Closing of unterminated emphasis: ``***``, ``**``, ``__``, ``*`` and ``_``.

Fixed-width markers look at the last marker run of the text and close it when
the number of exact-width runs is odd. Single-width markers look at the first
qualifying run instead.
"""

from __future__ import annotations

import re

from .scanning import (
    ends_inside_fence,
    is_whitespace,
    is_whitespace_or_markers,
    line_start,
    scan_delimiters,
    trailing_marker_content,
)


LIST_ITEM_PREFIX_RE = re.compile(r"^\s*[-*+]\s+$")


def _has_meaningful_content(content) -> bool:
    return bool(content) and not is_whitespace_or_markers(content)


def close_fixed_width(text: str, marker: str) -> str:
    """Append ``marker`` when the last ``marker`` run opens an unclosed span."""
    if marker[0] not in text or ends_inside_fence(text):
        return text
    content = trailing_marker_content(text, marker)
    if not _has_meaningful_content(content):
        return text

    marker_index = len(text) - len(content) - len(marker)
    prefix = text[line_start(text, marker_index) : marker_index]
    if LIST_ITEM_PREFIX_RE.match(prefix) and "\n" in content:
        return text

    scan = scan_delimiters(
        text, marker[0], len(marker), skip_math=marker == "__", exclude_rules=True
    )
    if scan.count % 2 == 1:
        return text + marker
    return text


def complete_half_closer(text: str, marker: str) -> str:
    """Finish a closing ``marker`` that has only received its first character.

    ``**bold*`` becomes ``**bold**`` rather than bold plus a stray ``*``.
    """
    char = marker[0]
    if len(text) < 2 or text[-1] != char or text[-2] == char or is_whitespace(text[-2]):
        return text
    if ends_inside_fence(text):
        return text
    if scan_delimiters(text, char, len(marker)).count % 2 != 1:
        return text
    if scan_delimiters(text, char, 1, exclude_list_markers=True).count != 1:
        return text
    return text + char


def _trailing_run_closes_both(text: str, char: str) -> bool:
    # "*a **b***": the final run closes the double and the single span at once.
    body = text.rstrip(char)
    if len(text) - len(body) != 3 or not body or is_whitespace(body[-1]):
        return False
    return scan_delimiters(text, char, 2, exclude_rules=True).count % 2 == 1


def close_single_width(text: str, char: str) -> str:
    if char not in text or ends_inside_fence(text):
        return text
    is_underscore = char == "_"
    scan = scan_delimiters(
        text,
        char,
        1,
        skip_math=is_underscore,
        exclude_list_markers=not is_underscore,
        exclude_rules=True,
    )
    if scan.first_index == -1:
        return text
    if not _has_meaningful_content(text[scan.first_index + 1 :]):
        return text
    if scan.count % 2 == 0 or _trailing_run_closes_both(text, char):
        return text
    if is_underscore:
        body = text.rstrip("\n")
        return body + char + text[len(body) :]
    return text + char


def repair_bold_italic(text: str) -> str:
    return close_fixed_width(text, "***")


def repair_bold(text: str) -> str:
    completed = complete_half_closer(text, "**")
    if completed != text:
        return completed
    return close_fixed_width(text, "**")


def repair_double_underscore(text: str) -> str:
    return close_fixed_width(text, "__")


def repair_single_asterisk(text: str) -> str:
    return close_single_width(text, "*")


def repair_single_underscore(text: str) -> str:
    return close_single_width(text, "_")
