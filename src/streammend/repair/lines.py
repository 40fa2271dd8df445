"""Handlers that look at whole lines rather than delimiter runs."""

from __future__ import annotations

import re

from .scanning import code_mask, ends_inside_fence


ZERO_WIDTH_SPACE = "\u200b"
SETEXT_UNDERLINE_RE = re.compile(r"^(?:-{1,2}|={1,2})$")
LIST_COMPARISON_RE = re.compile(r"^(\s*(?:[-*+]|\d+[.)]) +)>(=?\s*\$?\d)", re.MULTILINE)


def break_setext_underline(text: str) -> str:
    """Keep a half-typed list bullet from turning the line above into a heading.

    A last line of ``-``, ``--``, ``=`` or ``==`` under a non-empty line would
    be read as a setext underline; a zero-width space breaks that reading.
    A trailing space already breaks it, so such lines are left alone.
    """
    newline = text.rfind("\n")
    if newline == -1 or ends_inside_fence(text):
        return text
    last_line = text[newline + 1 :]
    if last_line != last_line.rstrip():
        return text
    if not SETEXT_UNDERLINE_RE.match(last_line.strip()):
        return text
    previous_line = text[text.rfind("\n", 0, newline) + 1 : newline]
    if not previous_line.strip():
        return text
    return text + ZERO_WIDTH_SPACE


def escape_list_comparisons(text: str) -> str:
    """Escape ``>`` used as "greater than" at the start of a list item (``- > 25``)."""
    if ">" not in text:
        return text
    mask = None
    pieces = []
    cursor = 0
    for match in LIST_COMPARISON_RE.finditer(text):
        if mask is None:
            mask = code_mask(text)
        if mask[match.start()]:
            continue
        pieces.append(text[cursor : match.start()])
        pieces.append(f"{match.group(1)}\\>{match.group(2)}")
        cursor = match.end()
    if not pieces:
        return text
    pieces.append(text[cursor:])
    return "".join(pieces)
