"""Table extraction from rendered HTML or Markdown, and export to CSV, TSV and Markdown."""

from __future__ import annotations

import csv
import io
from html.parser import HTMLParser
from typing import List, Optional

from .models import TableData
from .segmentation import md


def table_to_csv(data: TableData) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    if data.headers:
        writer.writerow(data.headers)
    writer.writerows(data.rows)
    output = buffer.getvalue()
    return output[:-1] if output.endswith("\n") else output


def _escape_tsv(value: str) -> str:
    return value.replace("\t", "\\t").replace("\n", "\\n").replace("\r", "\\r")


def table_to_tsv(data: TableData) -> str:
    lines = []
    if data.headers:
        lines.append("\t".join(_escape_tsv(cell) for cell in data.headers))
    for row in data.rows:
        lines.append("\t".join(_escape_tsv(cell) for cell in row))
    return "\n".join(lines)


def escape_markdown_table_cell(cell: str) -> str:
    # Backslashes first, otherwise the pipe escapes would be doubled.
    return cell.replace("\\", "\\\\").replace("|", "\\|")


def _markdown_row(cells: List[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def table_to_markdown(data: TableData) -> str:
    if not data.headers:
        return ""
    width = len(data.headers)
    lines = [
        _markdown_row([escape_markdown_table_cell(cell) for cell in data.headers]),
        _markdown_row(["---"] * width),
    ]
    for row in data.rows:
        padded = list(row) + [""] * (width - len(row))
        lines.append(_markdown_row([escape_markdown_table_cell(cell) for cell in padded]))
    return "\n".join(lines)


class _TableHTMLParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.data = TableData()
        self._section: Optional[str] = None
        self._row: Optional[List[str]] = None
        self._cell: Optional[List[str]] = None
        self._depth = 0

    def handle_starttag(self, tag, attrs):
        if tag == "table":
            self._depth += 1
        if self._depth != 1:
            return
        if tag in ("thead", "tbody"):
            self._section = tag
        elif tag == "tr" and self._section != "thead":
            self._row = []
        elif (tag == "th" and self._section == "thead") or (tag == "td" and self._row is not None):
            self._cell = []

    def handle_endtag(self, tag):
        if tag == "table":
            self._depth -= 1
            return
        if self._depth != 1:
            return
        if tag in ("th", "td") and self._cell is not None:
            text = "".join(self._cell).strip()
            if tag == "th":
                self.data.headers.append(text)
            else:
                self._row.append(text)
            self._cell = None
        elif tag == "tr" and self._row is not None:
            self.data.rows.append(self._row)
            self._row = None
        elif tag in ("thead", "tbody"):
            self._section = None

    def handle_data(self, data):
        if self._cell is not None:
            self._cell.append(data)


def extract_table_from_html(markup: str) -> TableData:
    """Read header cells from ``thead`` and data cells from the body rows.

    Rows outside ``thead`` count as body rows, as they would once a browser
    inserts the implicit ``tbody``.
    """
    parser = _TableHTMLParser()
    parser.feed(markup)
    parser.close()
    return parser.data


def extract_tables_from_markdown(markdown: str) -> List[TableData]:
    tables: List[TableData] = []
    current: Optional[TableData] = None
    row: Optional[List[str]] = None
    in_head = False
    tokens = md.parse(markdown)
    for index, token in enumerate(tokens):
        if token.type == "table_open":
            current = TableData()
        elif token.type == "table_close" and current is not None:
            tables.append(current)
            current = None
        elif token.type == "thead_open":
            in_head = True
        elif token.type == "thead_close":
            in_head = False
        elif token.type == "tr_open":
            row = []
        elif token.type == "tr_close" and current is not None and row is not None:
            if in_head:
                current.headers = row
            else:
                current.rows.append(row)
            row = None
        elif token.type in ("th_open", "td_open") and row is not None:
            inline = tokens[index + 1] if index + 1 < len(tokens) else None
            row.append(inline.content.strip() if inline is not None and inline.type == "inline" else "")
    return tables
