"""Character classifiers and boundary scanners shared by the construct handlers.

Every scanner is a single forward (or backward) pass over the text carrying a
few flags. None of them raise on arbitrary ``str`` input; when a scan cannot
find what it is looking for it reports "no match" (``-1``, ``None`` or
``False``) and the calling handler leaves the text alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


MARKER_CHARS = frozenset("*_~`")
LIST_BULLETS = frozenset("*+-")


@dataclass
class DelimiterScan:
    count: int = 0
    first_index: int = -1


def is_word_char(char: str) -> bool:
    if not char:
        return False
    code = ord(char[0])
    if 48 <= code <= 57 or 65 <= code <= 90 or 97 <= code <= 122 or code == 95:
        return True
    if code < 128:
        return False
    return char[0].isalnum()


def is_whitespace(char: str) -> bool:
    return bool(char) and char.isspace()


def is_escaped(text: str, index: int) -> bool:
    backslashes = 0
    cursor = index - 1
    while cursor >= 0 and text[cursor] == "\\":
        backslashes += 1
        cursor -= 1
    return backslashes % 2 == 1


def is_whitespace_or_markers(content: str) -> bool:
    return all(char.isspace() or char in MARKER_CHARS for char in content)


def count_triple_backticks(text: str) -> int:
    return text.count("```")


def has_complete_code_block(text: str) -> bool:
    fences = count_triple_backticks(text)
    return fences > 0 and fences % 2 == 0 and "\n" in text


def ends_inside_fence(text: str) -> bool:
    return count_triple_backticks(text) % 2 == 1 and "\n" in text


def fence_mask(text: str) -> List[bool]:
    """Flag every position that belongs to fenced code, fences included.

    Triple backticks only delimit fences once the text spans more than one
    line; a single-line ```like this``` span is inline code.
    """
    length = len(text)
    mask = [False] * length
    if "\n" not in text:
        return mask
    inside = False
    index = 0
    while index < length:
        if text.startswith("```", index):
            inside = not inside
            for offset in range(index, min(index + 3, length)):
                mask[offset] = True
            index += 3
            continue
        mask[index] = inside
        index += 1
    return mask


def code_mask(text: str) -> List[bool]:
    """Code state before each position, plus the state at the end of the text.

    The returned list has ``len(text) + 1`` entries. Backticks themselves are
    flagged as code so a delimiter sitting on one is never interpreted.
    """
    length = len(text)
    mask = [False] * (length + 1)
    in_fence = False
    in_inline = False
    index = 0
    while index < length:
        if text.startswith("```", index):
            in_fence = not in_fence
            in_inline = False
            for offset in range(index, min(index + 3, length)):
                mask[offset] = True
            index += 3
            continue
        if text[index] == "`" and not in_fence and not is_escaped(text, index):
            in_inline = not in_inline
            mask[index] = True
            index += 1
            continue
        mask[index] = in_fence or in_inline
        index += 1
    mask[length] = in_fence or in_inline
    return mask


def is_within_code_block(text: str, position: int) -> bool:
    if position < 0:
        return False
    mask = code_mask(text)
    return mask[min(position, len(text))]


def math_mask(text: str) -> List[bool]:
    """Math state before each position, plus the state at the end of the text.

    ``$$`` toggles block math and cancels any open inline span; a single
    ``$`` toggles inline math only outside block math. ``\\$`` is literal.
    """
    length = len(text)
    mask = [False] * (length + 1)
    in_inline = False
    in_block = False
    index = 0
    while index < length:
        state = in_inline or in_block
        mask[index] = state
        char = text[index]
        if char == "\\" and index + 1 < length and text[index + 1] == "$":
            mask[index + 1] = state
            index += 2
            continue
        if char == "$":
            if index + 1 < length and text[index + 1] == "$":
                mask[index + 1] = state
                in_block = not in_block
                in_inline = False
                index += 2
                continue
            if not in_block:
                in_inline = not in_inline
        index += 1
    mask[length] = in_inline or in_block
    return mask


def is_within_math_block(text: str, position: int) -> bool:
    if position < 0:
        return False
    mask = math_mask(text)
    return mask[min(position, len(text))]


def find_matching_opening_bracket(text: str, close_index: int) -> int:
    depth = 1
    for index in range(close_index - 1, -1, -1):
        char = text[index]
        if char == "]":
            depth += 1
        elif char == "[":
            depth -= 1
            if depth == 0:
                return index
    return -1


def find_matching_closing_bracket(text: str, open_index: int) -> int:
    depth = 1
    for index in range(open_index + 1, len(text)):
        char = text[index]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _url_end(text: str, open_paren: int) -> int:
    depth = 0
    for index in range(open_paren, len(text)):
        char = text[index]
        if char == "\n":
            return -1
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


def link_url_mask(text: str) -> List[bool]:
    """Flag the ``(destination)`` of every complete link or image.

    Parentheses inside the destination nest, so
    ``[x](https://en.wikipedia.org/wiki/A_(b))`` is covered up to its last ``)``.
    """
    mask = [False] * len(text)
    start = text.find("](")
    while start != -1:
        end = _url_end(text, start + 1)
        if end == -1:
            start = text.find("](", start + 2)
            continue
        for index in range(start + 1, end + 1):
            mask[index] = True
        start = text.find("](", end)
    return mask


def is_within_link_or_image_url(text: str, position: int) -> bool:
    if position < 0 or position >= len(text):
        return False
    return link_url_mask(text)[position]


def line_start(text: str, index: int) -> int:
    return text.rfind("\n", 0, index) + 1


def line_end(text: str, index: int) -> int:
    end = text.find("\n", index)
    return len(text) if end == -1 else end


def is_horizontal_rule(text: str, marker_index: int, marker: str) -> bool:
    line = text[line_start(text, marker_index) : line_end(text, marker_index)]
    markers = 0
    for char in line:
        if char == marker:
            markers += 1
        elif char not in " \t":
            return False
    return markers >= 3


def is_list_marker(text: str, index: int) -> bool:
    if index >= len(text) or text[index] not in LIST_BULLETS:
        return False
    next_char = text[index + 1] if index + 1 < len(text) else ""
    if next_char not in (" ", "\t"):
        return False
    prefix = text[line_start(text, index) : index]
    return all(char in " \t" for char in prefix)


def scan_delimiters(
    text: str,
    char: str,
    width: int,
    *,
    skip_math: bool = False,
    skip_fences: bool = True,
    exclude_list_markers: bool = False,
    exclude_rules: bool = False,
) -> DelimiterScan:
    """Count runs of exactly ``width`` ``char`` that can act as delimiters.

    One pass yields both the count and the index of the first qualifying run.
    Runs are disqualified when escaped, flanked by word characters on both
    sides, inside fenced code, inside the destination of a complete link or
    image, inside math (``skip_math``), when they are a list bullet
    (``exclude_list_markers``) or part of a thematic break (``exclude_rules``).
    """
    scan = DelimiterScan()
    length = len(text)
    fences = fence_mask(text) if skip_fences else None
    maths = math_mask(text) if skip_math and "$" in text else None
    urls = link_url_mask(text) if "](" in text else None
    index = 0
    while index < length:
        if text[index] != char:
            index += 1
            continue
        start = index
        while index < length and text[index] == char:
            index += 1
        if index - start != width:
            continue
        if is_escaped(text, start):
            continue
        if fences is not None and fences[start]:
            continue
        if maths is not None and maths[start]:
            continue
        if urls is not None and urls[start]:
            continue
        prev_char = text[start - 1] if start > 0 else ""
        next_char = text[index] if index < length else ""
        if is_word_char(prev_char) and is_word_char(next_char):
            continue
        if exclude_list_markers and width == 1 and is_list_marker(text, start):
            continue
        if exclude_rules and is_horizontal_rule(text, start, char):
            continue
        scan.count += 1
        if scan.first_index == -1:
            scan.first_index = start
    return scan


def trailing_marker_content(text: str, marker: str) -> Optional[str]:
    """Return what follows the last ``marker`` when nothing after it reuses its character."""
    last = text.rfind(marker[0])
    if last == -1:
        return None
    start = last - len(marker) + 1
    if start < 0 or text[start : last + 1] != marker:
        return None
    return text[last + 1 :]
