"""Root conftest — ensures project root is on sys.path for pytest.

Also isolates every test from the developer's real configuration: the
cc-standup env vars are removed, the cwd moves to a temp dir (so no stray
.env is read), and the cached Settings instance is reset.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
import structlog

# Must happen before any local imports so test modules can be collected.
sys.path.insert(0, str(Path(__file__).parent))

from config import get_settings  # noqa: E402

_CONFIG_ENV_VARS = (
    "PROOF_LOG_DIR",
    "PROOF_LOG_EXT",
    "STANDUP_FORMAT",
    "LOG_LEVEL",
    "LOG_FILE",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    # CLI tests bind handlers to capsys streams; drop them between tests.
    structlog.reset_defaults()
    logging.getLogger().handlers = []
