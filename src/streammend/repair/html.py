from __future__ import annotations

import re

from .scanning import is_within_code_block


INCOMPLETE_TAG_RE = re.compile(r"<[a-zA-Z/][^>]*$")


def strip_incomplete_html_tag(text: str) -> str:
    """Drop a tag opener such as ``<div class="x`` that has not reached its ``>`` yet."""
    if "<" not in text:
        return text
    match = INCOMPLETE_TAG_RE.search(text)
    if match is None or is_within_code_block(text, match.start()):
        return text
    return text[: match.start()].rstrip()
