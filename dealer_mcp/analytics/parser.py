"""Delimited-row parsing and numeric coercion for Vercel CSV exports."""

from __future__ import annotations

import math
from dataclasses import dataclass

_QUOTE = '"'
_DELIMITER = ","


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into fields.

    Double quotes toggle quoted mode, a doubled quote inside quoted mode is a
    literal quote, and commas only separate fields outside quotes.  The end of
    the line always emits the final field.  An unbalanced quote is tolerated:
    whatever was accumulated is emitted as-is.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == _QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == _QUOTE:
                current.append(_QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == _DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def to_number(raw: str | None) -> int | float:
    """Coerce a CSV numeric field; anything unusable becomes 0.

    Thousands separators and surrounding whitespace are stripped.  Values that
    do not parse, are not finite, or are negative coerce to 0.  Integral values
    come back as ``int``.
    """
    if not raw:
        return 0
    cleaned = raw.replace(",", "").strip()
    if not cleaned or "_" in cleaned:
        return 0
    try:
        value = float(cleaned)
    except ValueError:
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    if value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class ReportRow:
    """One analytics record: a label plus visitor and visit counts.

    Counts are non-negative but not always integers: a fractional cell such as
    ``12.5`` is kept as a float rather than truncated.
    """

    item: str
    visitors: int | float = 0
    total: int | float = 0

    @classmethod
    def from_fields(cls, fields: list[str]) -> ReportRow | None:
        """Build a row from parsed positions 0/1/2; ``None`` when item is empty."""
        item, visitors_raw, total_raw = (list(fields[:3]) + ["", "", ""])[:3]
        if not item:
            return None
        return cls(item=item, visitors=to_number(visitors_raw), total=to_number(total_raw))

    def as_dict(self) -> dict[str, int | float | str]:
        return {"item": self.item, "visitors": self.visitors, "total": self.total}
