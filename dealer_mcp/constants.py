"""Shared constants used across the analytics engine and tool wrappers.

Single source of truth for report labels, report types and query limits.
"""

from __future__ import annotations

from enum import Enum


class ReportLabel(str, Enum):
    """Canonical report categories, as they appear in export file names."""

    PAGES = "Top Pages"
    REFERRERS = "Top Referrers"
    COUNTRIES = "Top Countries"
    BROWSERS = "Top Browsers"
    DEVICES = "Top Devices"
    OPERATING_SYSTEMS = "Top Operating Systems"
    UNKNOWN = "Unknown"


REPORT_TYPES: dict[str, ReportLabel] = {
    "pages": ReportLabel.PAGES,
    "referrers": ReportLabel.REFERRERS,
    "countries": ReportLabel.COUNTRIES,
    "browsers": ReportLabel.BROWSERS,
    "devices": ReportLabel.DEVICES,
    "operating-systems": ReportLabel.OPERATING_SYSTEMS,
}

KNOWN_LABELS: tuple[ReportLabel, ...] = tuple(REPORT_TYPES.values())

LABEL_SEPARATOR = " - "
REPORT_EXTENSION = ".csv"

SORT_FIELDS: frozenset[str] = frozenset({"visitors", "total"})
SORT_ORDERS: frozenset[str] = frozenset({"asc", "desc"})

DEFAULT_REPORT_TYPE = "pages"
DEFAULT_SORT_FIELD = "visitors"
DEFAULT_SORT_ORDER = "desc"
DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 200
