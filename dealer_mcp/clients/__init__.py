"""Shared external API clients."""

from dealer_mcp.clients.supabase import SupabaseVehicleStore
from dealer_mcp.data.store import VehicleStoreError

__all__ = [
    "SupabaseVehicleStore",
    "VehicleStoreError",
]
