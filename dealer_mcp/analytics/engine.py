"""Composes catalog resolution, row loading and the query pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dealer_mcp.analytics.catalog import ReportCatalog, ReportFile
from dealer_mcp.analytics.errors import AnalyticsError
from dealer_mcp.analytics.loader import load_rows
from dealer_mcp.analytics.query import QueryCriteria, run_query
from dealer_mcp.analytics.render import (
    ReportView,
    render_catalog,
    render_error,
    render_report,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportOutcome:
    """Typed result of one analytics call: a listing, a view, or an error."""

    catalog: list[ReportFile] | None = None
    view: ReportView | None = None
    error: AnalyticsError | None = None
    data_dir: str = ""
    include_summary: bool = True

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        if self.error is not None:
            return render_error(self.error)
        if self.view is not None:
            return render_report(self.view, include_summary=self.include_summary)
        return render_catalog(self.catalog or [], self.data_dir)

    def as_dict(self) -> dict[str, object]:
        if self.error is not None:
            return {"error": True, "code": self.error.kind, "message": self.error.message}
        if self.view is not None:
            return self.view.as_dict()
        entries = self.catalog or []
        return {
            "count": len(entries),
            "reports": [entry.as_dict() for entry in entries],
        }


def run_report(catalog: ReportCatalog, criteria: QueryCriteria) -> ReportOutcome:
    """Execute one analytics request; anticipated failures come back as outcomes."""
    try:
        if criteria.list_reports:
            return ReportOutcome(catalog=catalog.describe_all(), data_dir=catalog.display_dir)
        criteria.validate()

        selected = catalog.resolve(file_name=criteria.file_name, report_type=criteria.report_type)
        rows = load_rows(catalog, selected)
        view = ReportView(
            report=ReportFile.from_name(selected),
            scanned=len(rows),
            result=run_query(rows, criteria),
            sort_by=criteria.sort_by,
            sort_order=criteria.sort_order,
        )
        return ReportOutcome(
            view=view,
            data_dir=catalog.display_dir,
            include_summary=criteria.include_summary,
        )
    except AnalyticsError as exc:
        logger.info("Analytics request failed (%s): %s", exc.kind, exc.message)
        return ReportOutcome(error=exc, data_dir=catalog.display_dir)
