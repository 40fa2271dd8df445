from __future__ import annotations

from .scanning import ends_inside_fence, fence_mask, is_escaped


def count_block_math_delimiters(text: str) -> int:
    """Count ``$$`` pairs that sit outside code and are not escaped."""
    fences = fence_mask(text)
    count = 0
    in_inline_code = False
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if fences[index]:
            index += 1
            continue
        if text.startswith("```", index):
            index += 3
            continue
        if char == "`":
            in_inline_code = not in_inline_code
        elif (
            char == "$"
            and not in_inline_code
            and index + 1 < length
            and text[index + 1] == "$"
            and not is_escaped(text, index)
        ):
            count += 1
            index += 2
            continue
        index += 1
    return count


def repair_block_math(text: str) -> str:
    """Close an open ``$$`` block. Single ``$`` is left alone; it is usually currency."""
    if "$$" not in text or ends_inside_fence(text):
        return text
    if count_block_math_delimiters(text) % 2 == 0:
        return text
    first = text.find("$$")
    if "\n" in text[first:] and not text.endswith("\n"):
        return text + "\n$$"
    return text + "$$"
