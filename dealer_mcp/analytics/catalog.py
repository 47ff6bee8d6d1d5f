"""Report catalog: maps report types and file names onto Vercel CSV exports.

The catalog is recomputed from the directory listing on every call; files are
an external read-only source and nothing here is cached.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

from dealer_mcp.analytics.errors import (
    ConfigurationError,
    EmptyCatalogError,
    InvalidFormatError,
    NoMatchError,
    NotFoundError,
)
from dealer_mcp.config import AnalyticsConfig
from dealer_mcp.constants import (
    DEFAULT_REPORT_TYPE,
    KNOWN_LABELS,
    LABEL_SEPARATOR,
    REPORT_EXTENSION,
    REPORT_TYPES,
    ReportLabel,
)

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"\.csv$", re.IGNORECASE)
_LABEL_PREFIX_RE = re.compile(r"^Top [^-]+ - ")


def _is_report_file(name: str) -> bool:
    return name.lower().endswith(REPORT_EXTENSION)


def infer_label(file_name: str) -> ReportLabel:
    for label in KNOWN_LABELS:
        if file_name.startswith(f"{label.value}{LABEL_SEPARATOR}"):
            return label
    return ReportLabel.UNKNOWN


def extract_date_range(file_name: str) -> str:
    return _LABEL_PREFIX_RE.sub("", _EXTENSION_RE.sub("", file_name), count=1)


@dataclass(frozen=True)
class ReportFile:
    """A catalog entry derived from a file name."""

    file_name: str
    label: ReportLabel
    date_range: str

    @classmethod
    def from_name(cls, file_name: str) -> ReportFile:
        return cls(
            file_name=file_name,
            label=infer_label(file_name),
            date_range=extract_date_range(file_name),
        )

    def as_dict(self) -> dict[str, str]:
        return {
            "file_name": self.file_name,
            "label": self.label.value,
            "date_range": self.date_range,
        }


class ReportCatalog:
    """Resolves report selections against one data directory."""

    def __init__(self, config: AnalyticsConfig) -> None:
        self.config = config

    @property
    def display_dir(self) -> str:
        return self.config.display_dir

    def list_files(self) -> list[str]:
        """Eligible report file names, sorted lexicographically."""
        try:
            names = os.listdir(self.config.data_dir)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read analytics directory {self.display_dir}: "
                f"{exc.strerror or exc}"
            ) from exc
        return sorted(name for name in names if _is_report_file(name))

    def describe_all(self) -> list[ReportFile]:
        return [ReportFile.from_name(name) for name in self.list_files()]

    def resolve_file_name(self, requested: str) -> str:
        """Validate an explicit file name; directory components are discarded."""
        clean = os.path.basename(requested.replace("\\", "/"))
        if not _is_report_file(clean):
            raise InvalidFormatError("fileName must be a .csv file")
        files = self.list_files()
        if not files:
            raise EmptyCatalogError(f"No CSV files found in {self.display_dir}")
        if clean not in files:
            raise NotFoundError(f"CSV file not found: {clean}")
        return clean

    def resolve_report_type(self, report_type: str) -> str:
        """Newest file for a report type (lexicographically last name wins)."""
        label = REPORT_TYPES[report_type]
        prefix = f"{label.value}{LABEL_SEPARATOR}"
        matches = [name for name in self.list_files() if name.startswith(prefix)]
        if not matches:
            raise NoMatchError(f"No CSV found for reportType '{report_type}'")
        logger.debug("Report type %s matched %d file(s)", report_type, len(matches))
        return matches[-1]

    def resolve_default(self) -> str:
        files = self.list_files()
        if not files:
            raise EmptyCatalogError(f"No CSV files found in {self.display_dir}")
        default_file = self.config.default_file
        if default_file and default_file in files:
            return default_file
        try:
            return self.resolve_report_type(DEFAULT_REPORT_TYPE)
        except NoMatchError:
            return files[-1]

    def resolve(self, *, file_name: str | None = None, report_type: str | None = None) -> str:
        if file_name:
            selected = self.resolve_file_name(file_name)
        elif report_type:
            selected = self.resolve_report_type(report_type)
        else:
            selected = self.resolve_default()
        logger.debug("Resolved analytics report %r", selected)
        return selected

    def read_text(self, file_name: str) -> str:
        path = self.config.data_dir / file_name
        try:
            return path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read {file_name}: {exc}") from exc
