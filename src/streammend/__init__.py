"""Repair incomplete Markdown while it is being streamed."""

from .config import parse_bool, parse_options
from .models import (
    INCOMPLETE_LINK_HREF,
    LinkMode,
    RepairHandler,
    RepairOptions,
    StreamSnapshot,
    TableData,
)
from .repair import RepairPipeline, build_pipeline, has_incomplete_code_fence, repair
from .segmentation import parse_blocks, prepare_trailing_block, split_stable
from .streaming import MarkdownStream

__all__ = [
    "INCOMPLETE_LINK_HREF",
    "LinkMode",
    "MarkdownStream",
    "RepairHandler",
    "RepairOptions",
    "RepairPipeline",
    "StreamSnapshot",
    "TableData",
    "build_pipeline",
    "has_incomplete_code_fence",
    "parse_blocks",
    "parse_bool",
    "parse_options",
    "prepare_trailing_block",
    "repair",
    "split_stable",
]
