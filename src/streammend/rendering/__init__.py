"""Rendering adapters for repaired Markdown."""

from .cache import BoundedCache
from .html import HtmlRenderer, MathFence, MermaidFence, is_incomplete_link

__all__ = ["BoundedCache", "HtmlRenderer", "MathFence", "MermaidFence", "is_incomplete_link"]
