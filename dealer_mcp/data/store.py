"""VehicleStore protocol and SQLite implementation for the vehicle table."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timezone
from typing import (
    Any,
    Protocol,
    runtime_checkable,
)

# Columns every vehicle dict exposes to tools.
VEHICLE_FIELDS = ("id", "year", "make", "model", "vin", "stock_number", "price")
PUBLIC_COLUMNS = ", ".join(VEHICLE_FIELDS)

# Public identifier name -> column name.
IDENTIFIER_COLUMNS: dict[str, str] = {
    "vehicle_id": "id",
    "vin": "vin",
    "stock_number": "stock_number",
}


class VehicleStoreError(RuntimeError):
    """Raised for backend read/write failures with structured metadata."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status
        self.details = details or {}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def identifier_filter(
    *,
    vehicle_id: int | None = None,
    vin: str | None = None,
    stock_number: str | None = None,
) -> tuple[str, Any]:
    """Return the single (column, value) pair to look a vehicle up by."""
    given = [
        (IDENTIFIER_COLUMNS[name], value)
        for name, value in (
            ("vehicle_id", vehicle_id),
            ("vin", vin),
            ("stock_number", stock_number),
        )
        if value is not None
    ]
    if len(given) != 1:
        raise ValueError("Exactly one of vehicle_id, vin or stock_number is required.")
    return given[0]


# ── Protocol ────────────────────────────────────────────────────────


@runtime_checkable
class VehicleStore(Protocol):
    """Find-one / update-one contract over the hosted vehicle table."""

    async def find_vehicles(
        self,
        *,
        vehicle_id: int | None = None,
        vin: str | None = None,
        stock_number: str | None = None,
    ) -> list[dict[str, Any]]: ...
    async def update_price(self, vehicle_id: int, price: float) -> dict[str, Any]: ...


class SqliteVehicleStore:
    """SQLite-backed vehicle store for local use and tests."""

    def __init__(self, db_path: str = ":memory:") -> None:
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        with self._lock:
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._create_schema()

    def _create_schema(self) -> None:
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS vehicles (
                id              INTEGER PRIMARY KEY,
                year            INTEGER,
                make            TEXT NOT NULL DEFAULT '',
                model           TEXT NOT NULL DEFAULT '',
                vin             TEXT,
                stock_number    TEXT,
                price           REAL,
                created_at      TEXT NOT NULL,
                updated_at      TEXT NOT NULL,
                deleted_at      TEXT
            );
            CREATE INDEX IF NOT EXISTS idx_vehicles_vin ON vehicles(vin);
            CREATE INDEX IF NOT EXISTS idx_vehicles_stock ON vehicles(stock_number);
        """)

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> dict[str, Any]:
        return {field: row[field] for field in VEHICLE_FIELDS}

    # ── Write helpers (seeding, admin) ─────────────────────────────

    def insert(self, vehicle: dict[str, Any]) -> int:
        """Insert one vehicle dict and return its id."""
        now = utc_now_iso()
        with self._lock:
            cur = self._conn.execute(
                "INSERT INTO vehicles (id, year, make, model, vin, stock_number, price, "
                "created_at, updated_at, deleted_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    vehicle.get("id"),
                    vehicle.get("year"),
                    vehicle.get("make", ""),
                    vehicle.get("model", ""),
                    vehicle.get("vin"),
                    vehicle.get("stock_number"),
                    vehicle.get("price"),
                    vehicle.get("created_at", now),
                    vehicle.get("updated_at", now),
                    vehicle.get("deleted_at"),
                ),
            )
            self._conn.commit()
            return int(cur.lastrowid)

    def get(self, vehicle_id: int) -> dict[str, Any] | None:
        """Fetch a vehicle by id, including soft-deleted rows."""
        with self._lock:
            row = self._conn.execute(
                f"SELECT {PUBLIC_COLUMNS}, updated_at FROM vehicles WHERE id = ?",
                (vehicle_id,),
            ).fetchone()
        if row is None:
            return None
        result = self._row_to_dict(row)
        result["updated_at"] = row["updated_at"]
        return result

    # ── VehicleStore contract ──────────────────────────────────────

    async def find_vehicles(
        self,
        *,
        vehicle_id: int | None = None,
        vin: str | None = None,
        stock_number: str | None = None,
    ) -> list[dict[str, Any]]:
        column, value = identifier_filter(
            vehicle_id=vehicle_id, vin=vin, stock_number=stock_number
        )
        try:
            with self._lock:
                rows = self._conn.execute(
                    f"SELECT {PUBLIC_COLUMNS} FROM vehicles "
                    f"WHERE {column} = ? AND deleted_at IS NULL ORDER BY id",
                    (value,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise VehicleStoreError(str(exc), code="SQLITE_ERROR") from exc
        return [self._row_to_dict(r) for r in rows]

    async def update_price(self, vehicle_id: int, price: float) -> dict[str, Any]:
        try:
            with self._lock:
                cur = self._conn.execute(
                    "UPDATE vehicles SET price = ?, updated_at = ? WHERE id = ?",
                    (price, utc_now_iso(), vehicle_id),
                )
                self._conn.commit()
                if cur.rowcount == 0:
                    raise VehicleStoreError(
                        f"Vehicle {vehicle_id} no longer exists.", code="NOT_FOUND"
                    )
                row = self._conn.execute(
                    f"SELECT {PUBLIC_COLUMNS} FROM vehicles WHERE id = ?",
                    (vehicle_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise VehicleStoreError(str(exc), code="SQLITE_ERROR") from exc
        return self._row_to_dict(row)
