"""
Application configuration loaded from environment variables.

Every value has a default, so cc-standup runs with no configuration at all.
CLI flags override whatever is set here.

Environment variables (see .env.example):
  PROOF_LOG_DIR    — directory holding YYYY-MM-DD.md proof-logs (default: ~/ops/proof-log)
  PROOF_LOG_EXT    — proof-log file extension without the dot (default: md)
  STANDUP_FORMAT   — default output format: plain, slack, tweet (default: plain)
  LOG_LEVEL        — diagnostic log level, written to stderr (default: WARNING)
  LOG_FILE         — optional file that also receives diagnostic logs
  LOG_FORMAT       — stderr log style: auto (console on a TTY, else json), json, console
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROOF_LOG_DIR = Path("~") / "ops" / "proof-log"
LOG_FORMATS = ("auto", "json", "console")


class Settings(BaseSettings):
    """Application settings. Loaded once at startup; never mutated at runtime."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Silently ignore unrecognised env vars
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # Proof-log location
    # -------------------------------------------------------------------------
    proof_log_dir: Path = Field(
        default=DEFAULT_PROOF_LOG_DIR,
        validate_default=True,
        description="Directory of daily proof-log files",
    )
    proof_log_ext: str = Field(default="md", min_length=1, max_length=10)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    standup_format: str = Field(default="plain")

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="auto")
    log_file: str | None = Field(default=None)

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return upper

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        lower = v.strip().lower()
        if lower not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}")
        return lower

    @field_validator("proof_log_dir")
    @classmethod
    def _expand_home(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("proof_log_ext")
    @classmethod
    def _strip_dot(cls, v: str) -> str:
        v = v.strip().lstrip(".")
        if not v or "/" in v:
            raise ValueError("proof_log_ext must be a bare extension such as 'md'")
        return v

    @field_validator("standup_format")
    @classmethod
    def _normalise_format(cls, v: str) -> str:
        # Unknown names are kept; StandupQuery falls back to plain.
        return v.strip().lower()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the singleton Settings instance.

    Cached after first call. Raises ValidationError if an env var is invalid.
    """
    return Settings()
