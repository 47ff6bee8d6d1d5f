"""Vercel analytics tool implementation over local CSV reports."""

from __future__ import annotations

import logging

from dealer_mcp.analytics.catalog import ReportCatalog
from dealer_mcp.analytics.engine import run_report
from dealer_mcp.analytics.query import QueryCriteria
from dealer_mcp.analytics.render import render_error
from dealer_mcp.config import AnalyticsConfig
from dealer_mcp.constants import DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER
from dealer_mcp.tools.responses import build_raw_response

logger = logging.getLogger(__name__)

_TOOL_NAME = "get_vercel_analytics"


def get_vercel_analytics_impl(
    *,
    config: AnalyticsConfig | None = None,
    report_type: str | None = None,
    file_name: str | None = None,
    list_reports: bool = False,
    page_contains: str | None = None,
    starts_with: str | None = None,
    min_visitors: float | None = None,
    min_total: float | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    limit: int | None = None,
    include_summary: bool | None = None,
    raw: bool = False,
) -> str:
    """Query a Vercel Analytics CSV export and render the result.

    Never raises: every failure is returned as an ``Error ...`` line (or a
    structured error envelope when ``raw`` is set).
    """
    try:
        criteria = QueryCriteria(
            report_type=report_type or None,
            file_name=file_name or None,
            list_reports=bool(list_reports),
            page_contains=page_contains or None,
            starts_with=starts_with or None,
            min_visitors=min_visitors,
            min_total=min_total,
            sort_by=sort_by or DEFAULT_SORT_FIELD,
            sort_order=sort_order or DEFAULT_SORT_ORDER,
            limit=limit,
            include_summary=include_summary is not False,
        )
        catalog = ReportCatalog(config or AnalyticsConfig.from_env())
        outcome = run_report(catalog, criteria)
        if raw:
            return build_raw_response(_TOOL_NAME, outcome.as_dict())
        return outcome.render()
    except Exception as exc:
        logger.exception("Unexpected failure in %s", _TOOL_NAME)
        if raw:
            return build_raw_response(
                _TOOL_NAME,
                {"error": True, "code": "unexpected", "message": str(exc) or "Unknown error"},
            )
        return render_error(exc)
