"""Runtime configuration for the analytics engine and the vehicle backends."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_REPORT_FILE = "Top Pages - Nov 13 '25, 11pm - Feb 13 '26.csv"
_DEFAULT_DATA_DIR = Path("src") / "lib" / "vercel"


@dataclass(frozen=True)
class AnalyticsConfig:
    """Where Vercel CSV exports live and which one is preferred by default."""

    data_dir: Path
    default_file: str | None = DEFAULT_REPORT_FILE

    @classmethod
    def from_env(cls) -> AnalyticsConfig:
        raw_dir = os.environ.get("VERCEL_ANALYTICS_DIR", "").strip()
        data_dir = Path(raw_dir) if raw_dir else Path.cwd() / _DEFAULT_DATA_DIR
        default_file = os.environ.get(
            "VERCEL_ANALYTICS_DEFAULT_FILE", DEFAULT_REPORT_FILE
        ).strip()
        return cls(data_dir=data_dir.resolve(), default_file=default_file or None)

    @property
    def display_dir(self) -> str:
        """Directory as shown to callers (relative to cwd when possible)."""
        try:
            return str(self.data_dir.relative_to(Path.cwd()))
        except ValueError:
            return str(self.data_dir)


@dataclass(frozen=True)
class SupabaseConfig:
    """Credentials for the hosted vehicle database."""

    url: str = ""
    service_role_key: str = ""

    @classmethod
    def from_env(cls) -> SupabaseConfig:
        return cls(
            url=os.environ.get("SUPABASE_URL", "").strip().rstrip("/"),
            service_role_key=os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "").strip(),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.service_role_key)
