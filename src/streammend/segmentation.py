"""Splitting a growing Markdown document into independently stable blocks.

Only the last block can still change while text is streaming in, so callers
render every earlier block once and send just the trailing block through
:func:`streammend.repair.repair`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import List, Optional, Tuple

import markdown_it

from .models import RepairOptions
from .repair import repair, strip_incomplete_html_tag


logger = logging.getLogger(__name__)

md = markdown_it.MarkdownIt("commonmark").enable(["table", "strikethrough"])

FOOTNOTE_REFERENCE_RE = re.compile(r"\[\^[^\]\s]{1,200}\](?!:)")
FOOTNOTE_DEFINITION_RE = re.compile(r"\[\^[^\]\s]{1,200}\]:")
OPENING_TAG_RE = re.compile(r"<(\w+)[\s>]")
CLOSING_TAG_RE = re.compile(r"</(\w+)>")
LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")


def _split_lines(text: str) -> List[str]:
    # Same line breaks as markdown-it, so token maps index these lines.
    return LINE_RE.findall(text)


def _raw_blocks(markdown: str) -> List[Tuple[str, str]]:
    tokens = md.parse(markdown)
    starts = {}
    for token in tokens:
        if token.level != 0 or not token.map or token.nesting == -1:
            continue
        starts.setdefault(token.map[0], token.type)
    if not starts:
        return [(markdown, "")]

    lines = _split_lines(markdown)
    ordered = sorted(starts)
    blocks = []
    for position, start in enumerate(ordered):
        begin = 0 if position == 0 else start
        end = ordered[position + 1] if position + 1 < len(ordered) else len(lines)
        block = "".join(lines[begin:end])
        if block:
            blocks.append((block, starts[start]))
    return blocks


def _opens_math(block: str) -> bool:
    return block.lstrip().startswith("$$") and block.count("$$") % 2 == 1


def _continues_math(previous: str, current: str) -> bool:
    if not _opens_math(previous):
        return False
    if current.strip() == "$$":
        return True
    return (
        current.rstrip().endswith("$$")
        and not current.lstrip().startswith("$$")
        and current.count("$$") == 1
    )


def parse_blocks(markdown: str) -> List[str]:
    """Split ``markdown`` into top-level blocks whose concatenation is the input."""
    if not markdown:
        return []
    if FOOTNOTE_REFERENCE_RE.search(markdown) or FOOTNOTE_DEFINITION_RE.search(markdown):
        # References and definitions must be rendered together.
        return [markdown]

    merged: List[str] = []
    open_tags: List[str] = []
    for block, kind in _raw_blocks(markdown):
        if open_tags:
            merged[-1] += block
            if kind == "html_block":
                closing = CLOSING_TAG_RE.search(block)
                if closing and closing.group(1) == open_tags[-1]:
                    open_tags.pop()
            continue

        if kind == "html_block":
            opening = OPENING_TAG_RE.search(block)
            if opening and f"</{opening.group(1)}>" not in block:
                open_tags.append(opening.group(1))

        if merged and _continues_math(merged[-1], block):
            merged[-1] += block
            continue
        merged.append(block)

    logger.debug(f"Segmented {len(markdown)} characters into {len(merged)} blocks")
    return merged


def split_stable(markdown: str) -> Tuple[List[str], str]:
    blocks = parse_blocks(markdown)
    if not blocks:
        return [], ""
    return blocks[:-1], blocks[-1]


def prepare_trailing_block(block: str, options: Optional[RepairOptions] = None) -> str:
    """Repair the volatile trailing block, dropping a half-written HTML tag first."""
    options = options or RepairOptions()
    stripped = strip_incomplete_html_tag(block)
    return repair(stripped, replace(options, html_tags=False))
