from __future__ import annotations

import logging
from typing import Optional

from .models import RepairOptions, StreamSnapshot
from .rendering import BoundedCache, HtmlRenderer
from .segmentation import prepare_trailing_block, split_stable


logger = logging.getLogger(__name__)


class MarkdownStream:
    """Accumulate streamed Markdown and expose a renderable view after every chunk.

    Stable blocks are passed through untouched; only the trailing block is
    repaired, and its repair is memoised in ``cache`` so replaying the same
    tail (for example after a no-op chunk) does no work.
    """

    def __init__(
        self,
        options: Optional[RepairOptions] = None,
        cache: Optional[BoundedCache] = None,
        renderer: Optional[HtmlRenderer] = None,
    ) -> None:
        self.options = options or RepairOptions()
        self.cache = cache if cache is not None else BoundedCache()
        self.renderer = renderer
        self._text = ""
        self._finished = False

    @property
    def text(self) -> str:
        return self._text

    def feed(self, chunk: str) -> StreamSnapshot:
        if not isinstance(chunk, str):
            raise TypeError(f"Stream chunks must be str, got {type(chunk).__name__}.")
        if self._finished:
            raise ValueError("Cannot feed a stream that has been finished.")
        self._text += chunk
        return self.snapshot()

    def snapshot(self) -> StreamSnapshot:
        stable, trailing = split_stable(self._text)
        key = ("repair", trailing)
        repaired = self.cache.get(key)
        if repaired is None:
            repaired = prepare_trailing_block(trailing, self.options)
            self.cache.put(key, repaired)
        logger.debug(f"Snapshot with {len(stable)} stable blocks, trailing block of {len(trailing)} chars")
        return StreamSnapshot(stable_blocks=stable, trailing_block=trailing, repaired_block=repaired)

    def finish(self) -> str:
        """Mark the stream complete and return the document exactly as received."""
        self._finished = True
        return self._text

    def render_html(self) -> str:
        if self.renderer is None:
            self.renderer = HtmlRenderer()
        snapshot = self.snapshot()
        parts = []
        for block in snapshot.stable_blocks:
            key = ("html", block)
            rendered = self.cache.get(key)
            if rendered is None:
                rendered = self.renderer.render(block)
                self.cache.put(key, rendered)
            parts.append(rendered)
        if self._finished:
            parts.append(self.renderer.render(snapshot.trailing_block))
        else:
            parts.append(self.renderer.render(snapshot.repaired_block))
        return "".join(parts)
