"""
Shared fixtures for propmatch tests.

Config, logger and regex cache are process-wide; every test starts clean.
"""

from datetime import datetime, timezone

import pytest

from propmatch.config import reset_config
from propmatch.utils.logger import setup_logger
from propmatch.utils.regex_utils import clear_regex_cache


@pytest.fixture(autouse=True)
def clean_state(monkeypatch, tmp_path):
    """Isolate each test from the developer's .env and earlier singletons."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "PROPMATCH_LOG_LEVEL",
        "PROPMATCH_LOG_DIR",
        "PROPMATCH_LOG_TO_FILE",
        "PROPMATCH_REGEX_CACHE_SIZE",
        "PROPMATCH_RELATIVE_DATES",
        "PROPMATCH_MAX_RELATIVE_AMOUNT",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_config()
    clear_regex_cache()
    setup_logger(log_level="WARNING")
    yield
    reset_config()
    clear_regex_cache()


@pytest.fixture
def now():
    """Fixed reference instant for relative date literals."""
    return datetime(2024, 12, 7, 12, 0, 0, tzinfo=timezone.utc)
