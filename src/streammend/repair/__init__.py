"""Repair of Markdown fragments that are still being streamed."""

from .code import has_incomplete_code_fence
from .core import RepairPipeline, build_pipeline, repair
from .html import strip_incomplete_html_tag
from .scanning import (
    is_within_code_block,
    is_within_link_or_image_url,
    is_within_math_block,
)

__all__ = [
    "RepairPipeline",
    "build_pipeline",
    "has_incomplete_code_fence",
    "is_within_code_block",
    "is_within_link_or_image_url",
    "is_within_math_block",
    "repair",
    "strip_incomplete_html_tag",
]
