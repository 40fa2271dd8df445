from __future__ import annotations

import logging
from functools import partial
from typing import Iterable, List, Optional, Sequence

from ..models import INCOMPLETE_LINK_SUFFIX, RepairHandler, RepairOptions
from ..plugins import HandlerFactory, get_handler_factory, register_handler
from .code import repair_inline_code
from .emphasis import (
    repair_bold,
    repair_bold_italic,
    repair_double_underscore,
    repair_single_asterisk,
    repair_single_underscore,
)
from .html import strip_incomplete_html_tag
from .links import repair_links
from .lines import break_setext_underline, escape_list_comparisons
from .math import repair_block_math
from .strikethrough import repair_strikethrough


logger = logging.getLogger(__name__)

LINK_HANDLER = "links"


def _when(enabled: bool, name: str, handle, priority: int) -> Optional[RepairHandler]:
    if not enabled:
        return None
    return RepairHandler(name=name, handle=handle, priority=priority)


def _html_tags(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.html_tags, "html_tags", strip_incomplete_html_tag, -10)


def _setext_headings(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.setext_headings, "setext_headings", break_setext_underline, 0)


def _comparison_operators(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.comparison_operators, "comparison_operators", escape_list_comparisons, 5)


def _links(options: RepairOptions) -> Optional[RepairHandler]:
    handle = partial(
        repair_links,
        mode=options.link_mode,
        links=options.links,
        images=options.images,
    )
    return _when(options.links or options.images, LINK_HANDLER, handle, 10)


def _bold_italic(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.bold_italic, "bold_italic", repair_bold_italic, 20)


def _bold(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.bold, "bold", repair_bold, 30)


def _double_underscore(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.italic, "double_underscore", repair_double_underscore, 40)


def _single_asterisk(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.italic, "single_asterisk", repair_single_asterisk, 41)


def _single_underscore(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.italic, "single_underscore", repair_single_underscore, 42)


def _inline_code(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.inline_code, "inline_code", repair_inline_code, 50)


def _strikethrough(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.strikethrough, "strikethrough", repair_strikethrough, 60)


def _katex(options: RepairOptions) -> Optional[RepairHandler]:
    return _when(options.katex, "katex", repair_block_math, 70)


BUILTIN_HANDLERS: Sequence[tuple[str, HandlerFactory]] = (
    ("html_tags", _html_tags),
    ("setext_headings", _setext_headings),
    ("comparison_operators", _comparison_operators),
    (LINK_HANDLER, _links),
    ("bold_italic", _bold_italic),
    ("bold", _bold),
    ("double_underscore", _double_underscore),
    ("single_asterisk", _single_asterisk),
    ("single_underscore", _single_underscore),
    ("inline_code", _inline_code),
    ("strikethrough", _strikethrough),
    ("katex", _katex),
)

for _name, _factory in BUILTIN_HANDLERS:
    try:
        register_handler(_name, _factory)
    except ValueError:
        pass


class RepairPipeline:
    """Ordered handlers, each consuming the previous handler's output."""

    def __init__(self, handlers: Iterable[RepairHandler]) -> None:
        # sorted() is stable, so equal priorities keep registration order.
        self.handlers: List[RepairHandler] = sorted(handlers, key=lambda handler: handler.priority)

    @property
    def names(self) -> List[str]:
        return [handler.name for handler in self.handlers]

    def run(self, text: str) -> str:
        if not isinstance(text, str) or not text:
            return text
        result = text
        for handler in self.handlers:
            output = handler.handle(result)
            if not isinstance(output, str):
                raise TypeError(
                    f"Repair handler '{handler.name}' returned {type(output).__name__}, expected str."
                )
            result = output
            if handler.name == LINK_HANDLER and result.endswith(INCOMPLETE_LINK_SUFFIX):
                logger.debug("Incomplete link closed; skipping remaining handlers")
                return result
        return result


def build_pipeline(
    options: Optional[RepairOptions] = None,
    handlers: Iterable[RepairHandler] = (),
) -> RepairPipeline:
    options = options or RepairOptions()
    resolved: List[RepairHandler] = []
    for name, _ in BUILTIN_HANDLERS:
        handler = get_handler_factory(name)(options)
        if handler is not None:
            resolved.append(handler)
    resolved.extend(handlers)
    pipeline = RepairPipeline(resolved)
    logger.debug(f"Repair pipeline: {', '.join(pipeline.names)}")
    return pipeline


def repair(
    text: str,
    options: Optional[RepairOptions] = None,
    handlers: Iterable[RepairHandler] = (),
) -> str:
    """Close or remove every construct left open at the end of ``text``.

    Complete constructs are never altered and the result is stable under
    repeated application. Non-``str`` and empty input is returned as is.
    """
    if not isinstance(text, str) or not text:
        return text
    return build_pipeline(options, handlers).run(text)
