"""Raw JSON envelope shared by tool implementations."""

from __future__ import annotations

import json
from typing import Any


def build_raw_response(tool_name: str, data: dict[str, Any]) -> str:
    payload = {
        "_raw": True,
        "_tool": tool_name,
        "_meta": {"schema_version": 1},
        "data": data,
    }
    return json.dumps(payload, indent=2, default=str)

