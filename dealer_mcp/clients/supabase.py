"""Async Supabase (PostgREST) client for the hosted vehicle table."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from dealer_mcp.config import SupabaseConfig
from dealer_mcp.data.store import (
    PUBLIC_COLUMNS,
    VehicleStoreError,
    identifier_filter,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=12)
_SELECT_COLUMNS = PUBLIC_COLUMNS.replace(" ", "")


class SupabaseVehicleStore:
    """VehicleStore backed by the Supabase REST API.

    Use as an async context manager; one HTTP session per context.
    """

    TABLE = "vehicles"

    def __init__(self, config: SupabaseConfig) -> None:
        self.config = config
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> SupabaseVehicleStore:
        if not self.config.is_configured:
            raise VehicleStoreError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are not configured.",
                code="MISSING_CREDENTIALS",
            )
        key = self.config.service_role_key
        self.session = aiohttp.ClientSession(
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self.session:
            await self.session.close()

    @property
    def _table_url(self) -> str:
        return f"{self.config.url}/rest/v1/{self.TABLE}"

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str],
        body: dict[str, Any] | None = None,
    ) -> Any:
        if not self.session:
            raise RuntimeError("Client not entered as context manager")

        headers = {"Prefer": "return=representation"} if body is not None else None
        try:
            async with self.session.request(
                method,
                self._table_url,
                params=params,
                json=body,
                headers=headers,
                timeout=_REQUEST_TIMEOUT,
            ) as resp:
                raw_text = await resp.text()
                payload: Any
                if raw_text:
                    try:
                        payload = json.loads(raw_text)
                    except json.JSONDecodeError:
                        payload = {"raw": raw_text}
                else:
                    payload = []

                if resp.status >= 400:
                    message = f"Supabase request failed with HTTP {resp.status}."
                    if isinstance(payload, dict):
                        message = str(
                            payload.get("message")
                            or payload.get("error")
                            or payload.get("hint")
                            or message
                        )
                    raise VehicleStoreError(
                        message,
                        code="SUPABASE_HTTP_ERROR",
                        status=resp.status,
                        details=payload if isinstance(payload, dict) else {"response": payload},
                    )
                return payload
        except VehicleStoreError:
            raise
        except TimeoutError as exc:
            raise VehicleStoreError(
                "Supabase request timed out.",
                code="TIMEOUT",
                details={"method": method, "params": params},
            ) from exc
        except aiohttp.ClientError as exc:
            logger.error("Supabase client error (%s %s): %s", method, self.TABLE, exc)
            raise VehicleStoreError(
                "Supabase request failed due to a network/client error.",
                code="NETWORK_ERROR",
                details={"method": method, "params": params, "error": str(exc)},
            ) from exc

    @staticmethod
    def _records(payload: Any) -> list[dict[str, Any]]:
        if isinstance(payload, list):
            return [r for r in payload if isinstance(r, dict)]
        if isinstance(payload, dict) and payload:
            return [payload]
        return []

    async def find_vehicles(
        self,
        *,
        vehicle_id: int | None = None,
        vin: str | None = None,
        stock_number: str | None = None,
    ) -> list[dict[str, Any]]:
        """Select non-deleted vehicles matching exactly one identifier."""
        column, value = identifier_filter(
            vehicle_id=vehicle_id, vin=vin, stock_number=stock_number
        )
        params = {
            "select": _SELECT_COLUMNS,
            "deleted_at": "is.null",
            column: f"eq.{value}",
        }
        return self._records(await self._request("GET", params=params))

    async def update_price(self, vehicle_id: int, price: float) -> dict[str, Any]:
        """Write a new price and return the updated row."""
        params = {"select": _SELECT_COLUMNS, "id": f"eq.{vehicle_id}"}
        body = {"price": price, "updated_at": utc_now_iso()}
        records = self._records(await self._request("PATCH", params=params, body=body))
        if len(records) != 1:
            raise VehicleStoreError(
                f"Expected one updated row for vehicle {vehicle_id}, got {len(records)}.",
                code="UNEXPECTED_RESULT",
            )
        return records[0]
