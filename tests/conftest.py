"""Shared test fixtures — temp report catalogs, store injection, config override."""

from __future__ import annotations

from pathlib import Path

import pytest

from dealer_mcp.analytics.catalog import ReportCatalog
from dealer_mcp.config import AnalyticsConfig
from dealer_mcp.data.inventory import set_store
from dealer_mcp.data.store import SqliteVehicleStore
from dealer_mcp.server import set_analytics_config

PAGES_FILE = "Top Pages - Jan 1, 26.csv"

PAGES_CSV = (
    "item,visitors,total\n"
    "/home,100,150\n"
    '/about,50,"1,200"\n'
)

DEMO_VEHICLES = [
    {
        "id": 1,
        "year": 2022,
        "make": "Porsche",
        "model": "911",
        "vin": "WP0AB2A99NS000001",
        "stock_number": "SL1001",
        "price": 129_900,
    },
    {
        "id": 2,
        "year": 2021,
        "make": "Ferrari",
        "model": "Roma",
        "vin": "ZFF98RNA0M0000002",
        "stock_number": "SL1002",
        "price": 219_500,
    },
    {
        "id": 3,
        "year": 2019,
        "make": "McLaren",
        "model": "720S",
        "vin": "SBM14DCA0KW000003",
        "stock_number": "SL1003",
        "price": 245_000,
        "deleted_at": "2026-01-05T00:00:00+00:00",
    },
]


def write_reports(directory: Path, files: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture()
def report_dir(tmp_path: Path) -> Path:
    """A report directory holding one small Top Pages export."""
    return write_reports(tmp_path / "vercel", {PAGES_FILE: PAGES_CSV})


@pytest.fixture()
def analytics_config(report_dir: Path) -> AnalyticsConfig:
    return AnalyticsConfig(data_dir=report_dir, default_file=None)


@pytest.fixture()
def catalog(analytics_config: AnalyticsConfig) -> ReportCatalog:
    return ReportCatalog(analytics_config)


@pytest.fixture(autouse=True)
def _inject_analytics_config(analytics_config: AnalyticsConfig):
    """Point the server wrapper at the per-test report directory."""
    set_analytics_config(analytics_config)
    yield
    set_analytics_config(None)


@pytest.fixture()
def vehicle_store() -> SqliteVehicleStore:
    store = SqliteVehicleStore(":memory:")
    for vehicle in DEMO_VEHICLES:
        store.insert(vehicle)
    return store


@pytest.fixture(autouse=True)
def _inject_test_store(vehicle_store: SqliteVehicleStore):
    """Give every test a fresh, isolated, seeded in-memory vehicle store."""
    set_store(vehicle_store)
    yield
    set_store(None)


@pytest.fixture()
def make_report_dir(tmp_path: Path):
    """Factory: write ``{file_name: content}`` into a fresh directory."""

    def _make(files: dict[str, str], name: str = "reports") -> Path:
        return write_reports(tmp_path / name, files)

    return _make
