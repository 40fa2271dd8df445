from __future__ import annotations

from .scanning import (
    count_triple_backticks,
    has_complete_code_block,
    is_escaped,
    is_whitespace_or_markers,
)


def has_incomplete_code_fence(markdown: str) -> bool:
    return count_triple_backticks(markdown) % 2 == 1


def count_single_backticks(text: str) -> int:
    count = 0
    length = len(text)
    index = 0
    while index < length:
        if text[index] != "`":
            index += 1
            continue
        start = index
        while index < length and text[index] == "`":
            index += 1
        if index - start == 1 and not is_escaped(text, start):
            count += 1
    return count


def repair_inline_code(text: str) -> str:
    """Close a trailing inline code span; fenced code is never touched."""
    if "`" not in text:
        return text
    multiline = "\n" in text

    if count_triple_backticks(text) % 2 == 1:
        # A single-line ```span``` missing its last backtick.
        if not multiline and text.endswith("``") and not text.endswith("```"):
            return text + "`"
        return text
    if has_complete_code_block(text):
        return text
    if text.endswith("```") or text.endswith("```\n"):
        return text

    content = text[text.rfind("`") + 1 :]
    if not content or is_whitespace_or_markers(content):
        return text
    if count_single_backticks(text) % 2 == 1:
        return text + "`"
    return text
