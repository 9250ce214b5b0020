"""
Input validation for a standup run.

Command-line flags and settings pass through StandupQuery before anything
touches the filesystem. Validation here is loose:
  - The date is used verbatim to build a filename; it is not calendar-checked
  - An unknown output format falls back to plain instead of failing
  - "~" in the log directory expands to the user's home
"""
from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import structlog
from pydantic import BaseModel, Field, field_validator

from config import DEFAULT_PROOF_LOG_DIR
from formatters import DEFAULT_FORMAT, FORMATTERS

log = structlog.get_logger(__name__)


def yesterday(today: date | None = None) -> str:
    """Return the ISO date of the day before today (local calendar)."""
    today = today or date.today()
    return (today - timedelta(days=1)).isoformat()


class StandupQuery(BaseModel):
    """
    Validated request for one standup report.

    Defaults:
      - target_date → yesterday
      - log_dir     → ~/ops/proof-log
      - output_format → plain
    """

    target_date: str = Field(default_factory=lambda: yesterday(), min_length=1)
    log_dir: Path = Field(default=DEFAULT_PROOF_LOG_DIR, validate_default=True)
    log_ext: str = Field(default="md", min_length=1)
    output_format: str = Field(default=DEFAULT_FORMAT)

    @field_validator("target_date", mode="before")
    @classmethod
    def _default_date(cls, v: object) -> str:
        if v is None:
            return yesterday()
        v = str(v).strip()
        return v or yesterday()

    @field_validator("log_dir")
    @classmethod
    def _expand_home(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("output_format", mode="before")
    @classmethod
    def _fallback_format(cls, v: object) -> str:
        name = str(v or "").strip().lower()
        if name not in FORMATTERS:
            log.warning("query.unknown_format", requested=name, using=DEFAULT_FORMAT)
            return DEFAULT_FORMAT
        return name

    def log_path(self) -> Path:
        """Return <log_dir>/<target_date>.<ext>."""
        return self.log_dir / f"{self.target_date}.{self.log_ext}"
