# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import hdoc.logs as mod_logs
from tests.utils.log_fixtures import direct_logger


# These fixtures are intentionally re-exported so pytest can discover them.
__all__ = [
    "direct_logger",
]

DEFAULT_TEST_LOG_LEVEL = "warning"


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's LOG_LEVEL/NO_COLOR from leaking into assertions."""
    for var in ("HDOC_LOG_LEVEL", "LOG_LEVEL", "FORCE_COLOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset the app logger before and after each test.

    The logger is a module-level singleton that persists between tests,
    and argument parsing changes its level.
    """
    logger = mod_logs.get_logger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    logger.enable_color = False
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
