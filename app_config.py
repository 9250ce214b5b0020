"""
Startup wiring — .env loading, settings, and logging.

Imported only by the CLI. The parser, aggregator, and formatters never see
settings; the CLI turns them into a StandupQuery and passes values in.
"""
from __future__ import annotations

from pathlib import Path

import structlog
from dotenv import load_dotenv

from config import Settings, get_settings
from logging_config import configure_logging

_ENV_FILE = Path(__file__).parent / ".env"

log = structlog.get_logger(__name__)


def init_app() -> Settings:
    """
    Load .env, build settings, and configure logging. Returns the settings.

    Raises pydantic.ValidationError if a configured value is invalid.
    """
    # Load .env from the project directory regardless of the caller's cwd.
    load_dotenv(_ENV_FILE)

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file, settings.log_format)
    log.debug("startup.configured", log_level=settings.log_level)
    return settings
