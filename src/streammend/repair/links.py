from __future__ import annotations

from typing import List, Optional

from ..models import INCOMPLETE_LINK_HREF, LinkMode
from .scanning import (
    code_mask,
    find_matching_closing_bracket,
    find_matching_opening_bracket,
)


def _close_label(before: str, label: str, mode: LinkMode) -> str:
    if mode is LinkMode.TEXT_ONLY:
        return before + label
    return f"{before}[{label}]({INCOMPLETE_LINK_HREF})"


def _repair_incomplete_url(
    text: str,
    paren_index: int,
    mask: List[bool],
    mode: LinkMode,
    links: bool,
    images: bool,
) -> Optional[str]:
    if ")" in text[paren_index + 2 :]:
        return None
    open_index = find_matching_opening_bracket(text, paren_index)
    if open_index == -1 or mask[open_index]:
        return None
    if open_index > 0 and text[open_index - 1] == "!":
        return text[: open_index - 1].rstrip() if images else text
    if not links:
        return text
    return _close_label(text[:open_index], text[open_index + 1 : paren_index], mode)


def _repair_open_label(
    text: str,
    open_index: int,
    mode: LinkMode,
    links: bool,
    images: bool,
) -> Optional[str]:
    if "]" in text[open_index + 1 :] and find_matching_closing_bracket(text, open_index) != -1:
        return None
    if open_index > 0 and text[open_index - 1] == "!":
        return text[: open_index - 1].rstrip() if images else text
    if not links:
        return text
    if mode is LinkMode.TEXT_ONLY:
        return text[:open_index] + text[open_index + 1 :]
    return f"{text}]({INCOMPLETE_LINK_HREF})"


def repair_links(
    text: str,
    mode: LinkMode = LinkMode.PLACEHOLDER,
    *,
    links: bool = True,
    images: bool = True,
) -> str:
    """Close or drop a link or image that is still being written at the end of ``text``.

    An unfinished URL (``[label](http://exa``) is replaced by the placeholder
    href; an unclosed label (``[label``) gets ``](placeholder)`` appended.
    Images cannot be shown half-formed and are removed together with the
    whitespace before them. Brackets inside code are ignored.
    """
    if "[" not in text:
        return text
    mask = code_mask(text)

    paren_index = text.rfind("](")
    if paren_index != -1 and not mask[paren_index]:
        result = _repair_incomplete_url(text, paren_index, mask, mode, links, images)
        if result is not None:
            return result

    index = text.rfind("[")
    while index != -1:
        if not mask[index]:
            result = _repair_open_label(text, index, mode, links, images)
            if result is not None:
                return result
        index = text.rfind("[", 0, index)
    return text
