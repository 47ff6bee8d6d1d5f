"""Analytics error kinds.

Every failure the engine can anticipate is an :class:`AnalyticsError` with a
stable ``kind`` slug.  The engine returns them inside a ``ReportOutcome``; only
the tool boundary turns them into text.
"""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base class for anticipated analytics failures."""

    kind = "analytics_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(AnalyticsError):
    """The data directory is missing or unreadable."""

    kind = "configuration"


class InvalidFormatError(AnalyticsError):
    """A requested file name does not carry the ``.csv`` extension."""

    kind = "invalid_format"


class NotFoundError(AnalyticsError):
    """A requested file name is not present in the catalog."""

    kind = "not_found"


class NoMatchError(AnalyticsError):
    """No catalog file matches the requested report type."""

    kind = "no_match"


class EmptyCatalogError(AnalyticsError):
    """The data directory holds no eligible report files."""

    kind = "empty_catalog"


class InvalidCriteriaError(AnalyticsError):
    """Query criteria carry an unsupported enum value."""

    kind = "invalid_criteria"
