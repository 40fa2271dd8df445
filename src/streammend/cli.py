"""
Repair streamed Markdown from the command line.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import parse_options
from .models import RepairOptions
from .rendering import HtmlRenderer
from .segmentation import parse_blocks
from .streaming import MarkdownStream
from .tables import extract_tables_from_markdown, table_to_csv, table_to_markdown, table_to_tsv


logger = logging.getLogger(__name__)

TABLE_EXPORTERS = {
    "csv": table_to_csv,
    "tsv": table_to_tsv,
    "markdown": table_to_markdown,
}
BLOCK_SEPARATOR = "\n<!-- block -->\n"
SNAPSHOT_SEPARATOR = "\n<!-- snapshot {index} -->\n"


def _split_option(token: str) -> Tuple[str, str]:
    if "=" not in token:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{token}'.")
    key, value = token.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Option key cannot be empty.")
    return key, value


def _positive_int(token: str) -> int:
    try:
        value = int(token)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got '{token}'.") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("Stream step must be at least 1.")
    return value


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(path: Optional[Path], content: str) -> None:
    if not content.endswith("\n"):
        content += "\n"
    if path is None:
        sys.stdout.write(content)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _chunks(text: str, step: int) -> Iterable[str]:
    for start in range(0, len(text), step):
        yield text[start : start + step]


def render_document(text: str, output_format: str, options: RepairOptions) -> str:
    if output_format == "blocks":
        return BLOCK_SEPARATOR.join(parse_blocks(text))
    stream = MarkdownStream(options=options)
    snapshot = stream.feed(text)
    if output_format == "html":
        return stream.render_html()
    return snapshot.markdown


def replay_stream(text: str, step: int, output_format: str, options: RepairOptions) -> str:
    stream = MarkdownStream(options=options)
    outputs: List[str] = []
    for index, chunk in enumerate(_chunks(text, step), start=1):
        snapshot = stream.feed(chunk)
        if output_format == "html":
            body = stream.render_html()
        elif output_format == "blocks":
            body = BLOCK_SEPARATOR.join(snapshot.stable_blocks + [snapshot.repaired_block])
        else:
            body = snapshot.markdown
        outputs.append(SNAPSHOT_SEPARATOR.format(index=index) + body)
    logger.debug(f"Replayed {len(outputs)} chunks; cache hits={stream.cache.hits} misses={stream.cache.misses}")
    return "".join(outputs).lstrip("\n")


def export_tables(text: str, table_format: str) -> str:
    exporter = TABLE_EXPORTERS[table_format]
    return "\n\n".join(exporter(table) for table in extract_tables_from_markdown(text))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Repair incomplete, streamed Markdown so it renders cleanly.")
    parser.add_argument("input_path", help="Path to the Markdown input, or '-' for standard input.")
    parser.add_argument("-o", "--output", type=Path, help="Optional path to write the result to.")
    parser.add_argument(
        "--format",
        default="markdown",
        choices=["markdown", "html", "blocks"],
        help="Output format (default: markdown).",
    )
    parser.add_argument(
        "--stream-step",
        type=_positive_int,
        metavar="N",
        help="Replay the input in N-character chunks and print every snapshot.",
    )
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        type=_split_option,
        metavar="KEY=VALUE",
        help="Repair option in KEY=VALUE form, e.g. link_mode=text-only (may repeat).",
    )
    parser.add_argument(
        "--table",
        choices=sorted(TABLE_EXPORTERS),
        help="Export every Markdown table in the input instead of repairing it.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        options = parse_options(dict(args.option or []))
        text = read_input(args.input_path)
    except (KeyError, ValueError) as exc:
        message = exc.args[0] if exc.args else exc
        sys.stderr.write(f"{message}\n")
        return 2
    except OSError as exc:
        sys.stderr.write(f"Cannot read {args.input_path}: {exc}\n")
        return 1

    if args.table:
        result = export_tables(text, args.table)
    elif args.stream_step:
        result = replay_stream(text, args.stream_step, args.format, options)
    else:
        result = render_document(text, args.format, options)
    write_output(args.output, result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
