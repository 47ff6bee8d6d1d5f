"""Tests for vehicle lookup / price update tools and the SQLite store."""

from __future__ import annotations

import pytest

from dealer_mcp.data.inventory import open_store, set_store
from dealer_mcp.data.store import (
    SqliteVehicleStore,
    VehicleStore,
    VehicleStoreError,
    identifier_filter,
)
from dealer_mcp.tools.pricing import format_money, lookup_vehicle_impl, update_price_impl

# ── Store ───────────────────────────────────────────────────────


class TestSqliteVehicleStore:
    def test_satisfies_protocol(self, vehicle_store: SqliteVehicleStore):
        assert isinstance(vehicle_store, VehicleStore)

    async def test_find_by_each_identifier(self, vehicle_store: SqliteVehicleStore):
        by_id = await vehicle_store.find_vehicles(vehicle_id=1)
        by_vin = await vehicle_store.find_vehicles(vin="WP0AB2A99NS000001")
        by_stock = await vehicle_store.find_vehicles(stock_number="SL1001")
        assert by_id == by_vin == by_stock
        assert by_id[0]["model"] == "911"

    async def test_soft_deleted_rows_are_hidden(self, vehicle_store: SqliteVehicleStore):
        assert await vehicle_store.find_vehicles(vehicle_id=3) == []

    async def test_update_price_touches_updated_at(self, vehicle_store: SqliteVehicleStore):
        before = vehicle_store.get(2)
        updated = await vehicle_store.update_price(2, 199_000)
        after = vehicle_store.get(2)
        assert updated["price"] == 199_000
        assert after["updated_at"] >= before["updated_at"]

    async def test_update_missing_vehicle_raises(self, vehicle_store: SqliteVehicleStore):
        with pytest.raises(VehicleStoreError) as excinfo:
            await vehicle_store.update_price(999, 1)
        assert excinfo.value.code == "NOT_FOUND"

    def test_identifier_filter_requires_exactly_one(self):
        assert identifier_filter(vin="X") == ("vin", "X")
        with pytest.raises(ValueError):
            identifier_filter()
        with pytest.raises(ValueError):
            identifier_filter(vehicle_id=1, vin="X")


class TestOpenStore:
    async def test_missing_backend_configuration(self, monkeypatch):
        set_store(None)
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        monkeypatch.delenv("DEALER_MCP_DB_PATH", raising=False)
        with pytest.raises(VehicleStoreError) as excinfo:
            async with open_store():
                pass
        assert excinfo.value.code == "MISSING_CREDENTIALS"

    async def test_sqlite_path_from_env(self, monkeypatch, tmp_path):
        set_store(None)
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.setenv("DEALER_MCP_DB_PATH", str(tmp_path / "vehicles.db"))
        async with open_store() as store:
            assert isinstance(store, SqliteVehicleStore)


# ── Tools ───────────────────────────────────────────────────────


class TestUpdatePrice:
    async def test_updates_by_vin(self, vehicle_store: SqliteVehicleStore):
        result = await update_price_impl(vin="ZFF98RNA0M0000002", price=205_000)
        assert result.startswith("Successfully updated vehicle price:")
        assert "Vehicle: 2021 Ferrari Roma" in result
        assert "Stock Number: SL1002" in result
        assert "Price: $219,500 -> $205,000" in result
        assert vehicle_store.get(2)["price"] == 205_000

    async def test_updates_by_stock_number(self, vehicle_store: SqliteVehicleStore):
        result = await update_price_impl(stock_number="SL1001", price=125_000.5)
        assert "Price: $129,900 -> $125,000.50" in result

    async def test_requires_an_identifier(self, vehicle_store: SqliteVehicleStore):
        result = await update_price_impl(price=1)
        assert result.startswith("Error: Please provide one identifier")

    async def test_rejects_multiple_identifiers(self, vehicle_store: SqliteVehicleStore):
        result = await update_price_impl(vehicle_id=1, vin="WP0AB2A99NS000001", price=1)
        assert "only one identifier" in result
        assert vehicle_store.get(1)["price"] == 129_900

    async def test_requires_price(self):
        result = await update_price_impl(vehicle_id=1)
        assert result == "Error: Please provide 'price' to update the vehicle price."

    async def test_rejects_negative_price(self, vehicle_store: SqliteVehicleStore):
        result = await update_price_impl(vehicle_id=1, price=-10)
        assert "non-negative" in result
        assert vehicle_store.get(1)["price"] == 129_900

    async def test_not_found(self):
        result = await update_price_impl(vehicle_id=42, price=1)
        assert result == "No vehicle found with ID: 42."

    async def test_soft_deleted_vehicle_not_found(self, vehicle_store: SqliteVehicleStore):
        result = await update_price_impl(vehicle_id=3, price=1)
        assert result == "No vehicle found with ID: 3."
        assert vehicle_store.get(3)["price"] == 245_000

    async def test_duplicate_identifier(self, vehicle_store: SqliteVehicleStore):
        vehicle_store.insert({"id": 4, "make": "BMW", "model": "M4", "stock_number": "SL1001"})
        result = await update_price_impl(stock_number="SL1001", price=1)
        assert result.startswith("Error: Multiple vehicles found")

    async def test_store_failure_on_lookup(self, monkeypatch, vehicle_store):
        async def _fail(**_kwargs):
            raise VehicleStoreError("connection refused", code="NETWORK_ERROR")

        monkeypatch.setattr(vehicle_store, "find_vehicles", _fail)
        result = await update_price_impl(vehicle_id=1, price=1)
        assert result == "Error finding vehicle: connection refused"

    async def test_store_failure_on_update(self, monkeypatch, vehicle_store):
        async def _fail(*_args):
            raise VehicleStoreError("permission denied", code="SUPABASE_HTTP_ERROR")

        monkeypatch.setattr(vehicle_store, "update_price", _fail)
        result = await update_price_impl(vehicle_id=1, price=1)
        assert result == "Error updating vehicle price: permission denied"

    async def test_missing_credentials(self, monkeypatch):
        set_store(None)
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        monkeypatch.delenv("DEALER_MCP_DB_PATH", raising=False)
        result = await update_price_impl(vehicle_id=1, price=1)
        assert result.startswith("Error: Missing Supabase credentials.")


class TestLookupVehicle:
    async def test_found(self):
        result = await lookup_vehicle_impl(vehicle_id=1)
        assert "Vehicle: 2022 Porsche 911" in result
        assert result.endswith("Price: $129,900")

    async def test_not_found_by_vin(self):
        result = await lookup_vehicle_impl(vin="NOPE")
        assert result == "No vehicle found with VIN: NOPE."

    async def test_requires_identifier(self):
        assert (await lookup_vehicle_impl()).startswith("Error: Please provide one identifier")


class TestFormatMoney:
    def test_values(self):
        assert format_money(None) == "N/A"
        assert format_money(129_900) == "$129,900"
        assert format_money(10.5) == "$10.50"
