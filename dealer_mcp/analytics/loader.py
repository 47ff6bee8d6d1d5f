"""Row loader: turns a catalog file into typed report rows."""

from __future__ import annotations

import logging
import re

from dealer_mcp.analytics.catalog import ReportCatalog
from dealer_mcp.analytics.parser import ReportRow, parse_csv_line

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def parse_rows(content: str) -> list[ReportRow]:
    """Parse CSV text; the first non-blank line is a header and is skipped."""
    lines = [line.strip() for line in _LINE_BREAK_RE.split(content)]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        return []

    rows: list[ReportRow] = []
    for line in lines[1:]:
        row = ReportRow.from_fields(parse_csv_line(line))
        if row is not None:
            rows.append(row)
    logger.debug("Parsed %d row(s) from %d data line(s)", len(rows), len(lines) - 1)
    return rows


def load_rows(catalog: ReportCatalog, file_name: str) -> list[ReportRow]:
    return parse_rows(catalog.read_text(file_name))
