"""Query pipeline: filter, rank and cap report rows."""

from __future__ import annotations

from dataclasses import dataclass, field

from dealer_mcp.analytics.errors import InvalidCriteriaError
from dealer_mcp.analytics.parser import ReportRow
from dealer_mcp.constants import (
    DEFAULT_LIMIT,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    MAX_LIMIT,
    MIN_LIMIT,
    REPORT_TYPES,
    SORT_FIELDS,
    SORT_ORDERS,
)


@dataclass(frozen=True)
class QueryCriteria:
    """Caller-supplied selection, filter, sort and limit options for one call."""

    report_type: str | None = None
    file_name: str | None = None
    list_reports: bool = False
    page_contains: str | None = None
    starts_with: str | None = None
    min_visitors: float | None = None
    min_total: float | None = None
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: str = DEFAULT_SORT_ORDER
    limit: int | None = None
    include_summary: bool = True

    def validate(self) -> QueryCriteria:
        if self.report_type is not None and self.report_type not in REPORT_TYPES:
            allowed = ", ".join(REPORT_TYPES)
            raise InvalidCriteriaError(
                f"Unknown reportType '{self.report_type}'. Expected one of: {allowed}"
            )
        if self.sort_by not in SORT_FIELDS:
            raise InvalidCriteriaError(
                f"Unknown sortBy '{self.sort_by}'. Expected 'visitors' or 'total'"
            )
        if self.sort_order not in SORT_ORDERS:
            raise InvalidCriteriaError(
                f"Unknown sortOrder '{self.sort_order}'. Expected 'asc' or 'desc'"
            )
        return self


@dataclass(frozen=True)
class QueryResult:
    """Ranked slice plus aggregates over everything that matched."""

    rows: list[ReportRow] = field(default_factory=list)
    matched: int = 0
    total_visitors: int | float = 0
    total_visits: int | float = 0

    def as_dict(self) -> dict[str, object]:
        return {
            "matched": self.matched,
            "total_visitors": self.total_visitors,
            "total_visits": self.total_visits,
            "rows": [row.as_dict() for row in self.rows],
        }


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return min(max(int(limit), MIN_LIMIT), MAX_LIMIT)


def _matches(row: ReportRow, criteria: QueryCriteria, needle: str | None) -> bool:
    if needle is not None and needle not in row.item.lower():
        return False
    if criteria.starts_with and not row.item.startswith(criteria.starts_with):
        return False
    if criteria.min_visitors is not None and row.visitors < criteria.min_visitors:
        return False
    if criteria.min_total is not None and row.total < criteria.min_total:
        return False
    return True


def filter_rows(rows: list[ReportRow], criteria: QueryCriteria) -> list[ReportRow]:
    needle = criteria.page_contains.lower() if criteria.page_contains else None
    return [row for row in rows if _matches(row, criteria, needle)]


def sort_rows(rows: list[ReportRow], sort_by: str, sort_order: str) -> list[ReportRow]:
    # sorted() stays stable with reverse=True, so ties keep their input order.
    return sorted(
        rows,
        key=lambda row: row.visitors if sort_by == "visitors" else row.total,
        reverse=sort_order == "desc",
    )


def run_query(rows: list[ReportRow], criteria: QueryCriteria) -> QueryResult:
    filtered = filter_rows(rows, criteria)
    ranked = sort_rows(filtered, criteria.sort_by, criteria.sort_order)
    return QueryResult(
        rows=ranked[: clamp_limit(criteria.limit)],
        matched=len(filtered),
        total_visitors=sum(row.visitors for row in filtered),
        total_visits=sum(row.total for row in filtered),
    )
