"""Text rendering for analytics results. Pure functions, no I/O."""

from __future__ import annotations

from dataclasses import dataclass

from dealer_mcp.analytics.catalog import ReportFile
from dealer_mcp.analytics.errors import AnalyticsError
from dealer_mcp.analytics.query import QueryResult

ERROR_PREFIX = "Error reading Vercel analytics CSV"


@dataclass(frozen=True)
class ReportView:
    """Everything needed to present one query over one report file."""

    report: ReportFile
    scanned: int
    result: QueryResult
    sort_by: str
    sort_order: str

    def as_dict(self) -> dict[str, object]:
        return {
            "report": self.report.as_dict(),
            "rows_scanned": self.scanned,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order,
            **self.result.as_dict(),
        }


def format_count(value: int | float) -> str:
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{int(value):,}"


def render_catalog(files: list[ReportFile], data_dir: str) -> str:
    if not files:
        return f"No CSV reports found in {data_dir}."
    lines = ["Available Vercel CSV reports:", ""]
    lines.extend(
        f"{index}. {entry.label.value} | {entry.date_range} | {entry.file_name}"
        for index, entry in enumerate(files, start=1)
    )
    return "\n".join(lines)


def render_empty(view: ReportView) -> str:
    return (
        "No rows match the current filters.\n\n"
        f"Report: {view.report.label.value}\n"
        f"Period: {view.report.date_range}\n"
        f"File: {view.report.file_name}\n"
        f"Rows scanned: {view.scanned}"
    )


def render_report(view: ReportView, *, include_summary: bool = True) -> str:
    if not view.result.rows:
        return render_empty(view)

    result = view.result
    lines: list[str] = []
    if include_summary:
        lines.extend([
            "Vercel Analytics Report",
            f"Report type: {view.report.label.value}",
            f"Period: {view.report.date_range}",
            f"File: {view.report.file_name}",
            f"Rows scanned: {view.scanned}",
            f"Rows matched: {result.matched}",
            f"Total visitors (matched): {format_count(result.total_visitors)}",
            f"Total visits (matched): {format_count(result.total_visits)}",
            "",
        ])

    lines.append(f"Top {len(result.rows)} rows by {view.sort_by} ({view.sort_order})")
    lines.append("")
    for rank, row in enumerate(result.rows, start=1):
        lines.append(
            f"{rank}. {row.item} | Visitors: {format_count(row.visitors)} "
            f"| Total: {format_count(row.total)}"
        )
    return "\n".join(lines)


def render_error(error: BaseException) -> str:
    message = error.message if isinstance(error, AnalyticsError) else str(error)
    return f"{ERROR_PREFIX}: {message or 'Unknown error'}"
