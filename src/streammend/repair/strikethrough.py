from __future__ import annotations

from .emphasis import close_fixed_width, complete_half_closer


def repair_strikethrough(text: str) -> str:
    if "~~" not in text:
        return text
    completed = complete_half_closer(text, "~~")
    if completed != text:
        return completed
    return close_fixed_width(text, "~~")
