"""HTML rendering through markdown-it-py that understands the incomplete-link href."""

from __future__ import annotations

import html
import logging
from typing import List, Optional, Sequence

import markdown_it

from ..models import INCOMPLETE_LINK_HREF
from ..plugins import (
    FenceRenderer,
    available_fence_renderers,
    get_fence_renderer_factory,
    register_fence_renderer,
)


logger = logging.getLogger(__name__)


def is_incomplete_link(href: Optional[str]) -> bool:
    return href == INCOMPLETE_LINK_HREF


def fence_language(info: str) -> str:
    parts = info.strip().split(maxsplit=1)
    return parts[0].lower() if parts else ""


class MermaidFence:
    def supports(self, language: str) -> bool:
        return language == "mermaid"

    def render(self, code: str, language: str) -> str:
        return f'<pre class="mermaid">{html.escape(code)}</pre>\n'


class MathFence:
    LANGUAGES = {"math", "latex", "tex", "katex"}

    def supports(self, language: str) -> bool:
        return language in self.LANGUAGES

    def render(self, code: str, language: str) -> str:
        return f'<div class="math math-display">{html.escape(code.strip())}</div>\n'


for _name, _factory in (("mermaid", MermaidFence), ("math", MathFence)):
    try:
        register_fence_renderer(_name, _factory)
    except ValueError:
        pass


def _render_link_open(renderer, tokens, idx, options, env):
    token = tokens[idx]
    if is_incomplete_link(token.attrGet("href")):
        token.attrs.pop("href", None)
        token.attrSet("data-incomplete", "true")
        token.attrSet("aria-disabled", "true")
    return renderer.renderToken(tokens, idx, options, env)


class HtmlRenderer:
    """Render repaired Markdown to HTML.

    ``fence_plugins`` names the fence renderers to consult, in order; ``None``
    selects every registered one. Names are resolved once, here.
    """

    def __init__(self, fence_plugins: Optional[Sequence[str]] = None) -> None:
        names = available_fence_renderers() if fence_plugins is None else list(fence_plugins)
        self.fence_renderers: List[FenceRenderer] = [
            get_fence_renderer_factory(name)() for name in names
        ]
        self._md = markdown_it.MarkdownIt("commonmark").enable(["table", "strikethrough"])
        default_fence = self._md.renderer.rules["fence"]
        fence_renderers = self.fence_renderers

        def render_fence(renderer, tokens, idx, options, env):
            token = tokens[idx]
            language = fence_language(token.info)
            for plugin in fence_renderers:
                if plugin.supports(language):
                    return plugin.render(token.content, language)
            return default_fence(tokens, idx, options, env)

        self._md.add_render_rule("link_open", _render_link_open)
        self._md.add_render_rule("fence", render_fence)
        logger.debug(f"HTML renderer fence plugins: {names}")

    def render(self, markdown: str) -> str:
        return self._md.render(markdown)
