"""Vehicle store facade: picks the backend the vehicle tools talk to.

Supabase is used when its credentials are configured.  Otherwise a local SQLite
database is used when ``DEALER_MCP_DB_PATH`` is set.  Tests inject a store with
:func:`set_store`.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dealer_mcp.clients.supabase import SupabaseVehicleStore
from dealer_mcp.config import SupabaseConfig
from dealer_mcp.data.store import SqliteVehicleStore, VehicleStore, VehicleStoreError

MISSING_CREDENTIALS_MESSAGE = (
    "Missing Supabase credentials. Please set SUPABASE_URL and "
    "SUPABASE_SERVICE_ROLE_KEY in .env file"
)

_store: VehicleStore | None = None
_sqlite_stores: dict[str, SqliteVehicleStore] = {}


def set_store(store: VehicleStore | None) -> None:
    """Inject a store instance for testing."""
    global _store  # noqa: PLW0603
    _store = store


def _get_sqlite_store(db_path: str) -> SqliteVehicleStore:
    store = _sqlite_stores.get(db_path)
    if store is None:
        store = SqliteVehicleStore(db_path)
        _sqlite_stores[db_path] = store
    return store


@asynccontextmanager
async def open_store() -> AsyncIterator[VehicleStore]:
    """Yield the active VehicleStore for the duration of one tool call."""
    if _store is not None:
        yield _store
        return

    supabase = SupabaseConfig.from_env()
    if supabase.is_configured:
        async with SupabaseVehicleStore(supabase) as remote:
            yield remote
        return

    db_path = os.environ.get("DEALER_MCP_DB_PATH", "").strip()
    if db_path:
        yield _get_sqlite_store(db_path)
        return

    raise VehicleStoreError(MISSING_CREDENTIALS_MESSAGE, code="MISSING_CREDENTIALS")
