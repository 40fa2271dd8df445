from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List


INCOMPLETE_LINK_HREF = "streamdown:incomplete-link"
INCOMPLETE_LINK_SUFFIX = f"]({INCOMPLETE_LINK_HREF})"


class LinkMode(Enum):
    PLACEHOLDER = "placeholder"
    TEXT_ONLY = "text-only"


@dataclass(frozen=True)
class RepairOptions:
    links: bool = True
    images: bool = True
    bold: bool = True
    italic: bool = True
    bold_italic: bool = True
    inline_code: bool = True
    strikethrough: bool = True
    katex: bool = True
    setext_headings: bool = True
    comparison_operators: bool = False
    html_tags: bool = False
    link_mode: LinkMode = LinkMode.PLACEHOLDER


@dataclass
class RepairHandler:
    name: str
    handle: Callable[[str], str]
    priority: int = 100


@dataclass
class TableData:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)


@dataclass
class StreamSnapshot:
    stable_blocks: List[str]
    trailing_block: str
    repaired_block: str

    @property
    def markdown(self) -> str:
        return "".join(self.stable_blocks) + self.repaired_block
