"""DealerMCP server — FastMCP entry point for analytics, vehicle and expense tooling."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from cip_protocol.orchestration.errors import (
    log_and_return_tool_error as _log_and_return_tool_error,
)
from mcp.server.fastmcp import FastMCP

from dealer_mcp.config import AnalyticsConfig
from dealer_mcp.prompts.expenses import web_team_expenses_text
from dealer_mcp.tools.analytics import get_vercel_analytics_impl
from dealer_mcp.tools.pricing import lookup_vehicle_impl, update_price_impl

# Load .env from project root (no extra dependency)
_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
if _ENV_FILE.is_file():
    for line in _ENV_FILE.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            k, _, v = line.partition("=")
            os.environ.setdefault(k.strip(), v.strip())

mcp = FastMCP("DealerMCP")
logger = logging.getLogger(__name__)

_analytics_config_override: AnalyticsConfig | None = None

ReportType = Literal[
    "pages", "referrers", "countries", "browsers", "devices", "operating-systems"
]


def set_analytics_config(config: AnalyticsConfig | None) -> None:
    """Inject an AnalyticsConfig (e.g. a temp report directory) for testing."""
    global _analytics_config_override  # noqa: PLW0603
    _analytics_config_override = config


def _get_analytics_config() -> AnalyticsConfig:
    return _analytics_config_override or AnalyticsConfig.from_env()


# ── Tool registrations ──────────────────────────────────────────────


@mcp.tool()
def get_vercel_analytics(
    report_type: ReportType | None = None,
    file_name: str = "",
    list_reports: bool = False,
    page_contains: str = "",
    starts_with: str = "",
    min_visitors: float | None = None,
    min_total: float | None = None,
    sort_by: Literal["visitors", "total"] = "visitors",
    sort_order: Literal["asc", "desc"] = "desc",
    limit: int = 20,
    include_summary: bool = True,
    raw: bool = False,
) -> str:
    """Query Vercel Analytics CSV reports (Pages, Referrers, Countries, Browsers, Devices, OS).

    file_name overrides report_type; list_reports returns the available report files.
    Results are sorted by visitors or total and capped at 1-200 rows (default 20).
    """
    try:
        return get_vercel_analytics_impl(
            config=_get_analytics_config(),
            report_type=report_type,
            file_name=file_name or None,
            list_reports=list_reports,
            page_contains=page_contains or None,
            starts_with=starts_with or None,
            min_visitors=min_visitors,
            min_total=min_total,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
            include_summary=include_summary,
            raw=raw,
        )
    except Exception as exc:
        return _log_and_return_tool_error(
            tool_name="get_vercel_analytics",
            exc=exc,
            user_message=(
                "I am having trouble reading the analytics reports right now. "
                "Please try again in a moment."
            ),
        )


@mcp.tool()
async def lookup_vehicle(
    vehicle_id: int | None = None,
    vin: str | None = None,
    stock_number: str | None = None,
) -> str:
    """Look up a single vehicle by ID, VIN or stock number (exactly one)."""
    try:
        return await lookup_vehicle_impl(
            vehicle_id=vehicle_id, vin=vin, stock_number=stock_number
        )
    except Exception as exc:
        return _log_and_return_tool_error(
            tool_name="lookup_vehicle",
            exc=exc,
            user_message=(
                "I am having trouble looking up that vehicle right now. "
                "Please try again in a moment."
            ),
        )


@mcp.tool()
async def update_price(
    vehicle_id: int | None = None,
    vin: str | None = None,
    stock_number: str | None = None,
    price: float | None = None,
) -> str:
    """Update the base price for a single vehicle identified by ID, VIN or stock number."""
    try:
        return await update_price_impl(
            vehicle_id=vehicle_id, vin=vin, stock_number=stock_number, price=price
        )
    except Exception as exc:
        return _log_and_return_tool_error(
            tool_name="update_price",
            exc=exc,
            user_message=(
                "I am having trouble updating that vehicle price right now. "
                "Please try again in a moment."
            ),
        )


# ── Prompts ─────────────────────────────────────────────────────────


@mcp.prompt()
def web_team_expenses(include_notes: bool = True) -> str:
    """Current web team infrastructure expenses and payment details."""
    return web_team_expenses_text(include_notes)


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
