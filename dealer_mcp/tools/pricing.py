"""Vehicle lookup and price update tool implementations. Pure CRUD, no analytics."""

from __future__ import annotations

import math
from typing import Any

from dealer_mcp.data.inventory import open_store
from dealer_mcp.data.store import VehicleStore, VehicleStoreError


def _identifier_error(
    vehicle_id: int | None, vin: str | None, stock_number: str | None
) -> str | None:
    count = sum(v is not None for v in (vehicle_id, vin, stock_number))
    if count == 0:
        return (
            "Error: Please provide one identifier ('vehicle_id', 'vin', or 'stock_number') "
            "to identify the vehicle."
        )
    if count > 1:
        return (
            "Error: Please provide only one identifier ('vehicle_id', 'vin', OR "
            "'stock_number'), not multiple."
        )
    return None


def _describe_identifier(
    vehicle_id: int | None, vin: str | None, stock_number: str | None
) -> str:
    if vehicle_id is not None:
        return f"ID: {vehicle_id}"
    if vin is not None:
        return f"VIN: {vin}"
    return f"Stock Number: {stock_number}"


def _vehicle_title(vehicle: dict[str, Any]) -> str:
    parts = (vehicle.get("year"), vehicle.get("make"), vehicle.get("model"))
    return " ".join(str(p) for p in parts if p not in (None, "")).strip()


def format_money(value: float | None) -> str:
    if value is None:
        return "N/A"
    if float(value).is_integer():
        return f"${int(value):,}"
    return f"${value:,.2f}"


async def _find_one(
    store: VehicleStore,
    *,
    vehicle_id: int | None,
    vin: str | None,
    stock_number: str | None,
) -> tuple[dict[str, Any] | None, str | None]:
    try:
        vehicles = await store.find_vehicles(
            vehicle_id=vehicle_id, vin=vin, stock_number=stock_number
        )
    except VehicleStoreError as exc:
        return None, f"Error finding vehicle: {exc}"

    if not vehicles:
        label = _describe_identifier(vehicle_id, vin, stock_number)
        return None, f"No vehicle found with {label}."
    if len(vehicles) > 1:
        return None, (
            "Error: Multiple vehicles found with the same identifier. "
            "This shouldn't happen. Please contact support."
        )
    return vehicles[0], None


def _vehicle_block(vehicle: dict[str, Any]) -> str:
    return (
        f"Vehicle: {_vehicle_title(vehicle)}\n"
        f"ID: {vehicle.get('id')}\n"
        f"VIN: {vehicle.get('vin') or 'N/A'}\n"
        f"Stock Number: {vehicle.get('stock_number') or 'N/A'}"
    )


async def lookup_vehicle_impl(
    *,
    vehicle_id: int | None = None,
    vin: str | None = None,
    stock_number: str | None = None,
) -> str:
    """Find one non-deleted vehicle by exactly one identifier."""
    problem = _identifier_error(vehicle_id, vin, stock_number)
    if problem:
        return problem

    try:
        async with open_store() as store:
            vehicle, error = await _find_one(
                store, vehicle_id=vehicle_id, vin=vin, stock_number=stock_number
            )
    except VehicleStoreError as exc:
        return f"Error: {exc}"

    if vehicle is None:
        return error or "Error: Unknown error"
    return f"{_vehicle_block(vehicle)}\nPrice: {format_money(vehicle.get('price'))}"


async def update_price_impl(
    *,
    vehicle_id: int | None = None,
    vin: str | None = None,
    stock_number: str | None = None,
    price: float | None = None,
) -> str:
    """Update the base price of one vehicle identified by id, VIN or stock number."""
    problem = _identifier_error(vehicle_id, vin, stock_number)
    if problem:
        return problem
    if price is None:
        return "Error: Please provide 'price' to update the vehicle price."
    if not math.isfinite(price) or price < 0:
        return "Error: 'price' must be a non-negative number."

    try:
        async with open_store() as store:
            vehicle, error = await _find_one(
                store, vehicle_id=vehicle_id, vin=vin, stock_number=stock_number
            )
            if vehicle is None:
                return error or "Error: Unknown error"
            try:
                updated = await store.update_price(vehicle["id"], price)
            except VehicleStoreError as exc:
                return f"Error updating vehicle price: {exc}"
    except VehicleStoreError as exc:
        return f"Error: {exc}"

    return (
        "Successfully updated vehicle price:\n\n"
        f"{_vehicle_block(updated)}\n\n"
        f"Price: {format_money(vehicle.get('price'))} -> {format_money(updated.get('price'))}"
    )
