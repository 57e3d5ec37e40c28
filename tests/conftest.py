"""Top-level pytest configuration for unifiedflux."""

import asyncio
import logging
import os

import pytest

# Import for side effects so the error registry is populated
import unifiedflux.errors.dispatch  # noqa: F401
from unifiedflux.dispatch import DispatcherSettings
from unifiedflux.logging import get_logger

# Configure asyncio to be less verbose
os.environ["PYTHONASYNCIODEBUG"] = "0"

pytest_plugins = [
    "pytest_asyncio",
]


@pytest.fixture(scope="session")
def event_loop_policy():
    """Return the event loop policy to use."""
    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture(autouse=True)
def _clean_flux_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep UNIFIEDFLUX_* variables from the outer shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("UNIFIEDFLUX_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings() -> DispatcherSettings:
    return DispatcherSettings()


class ListHandler(logging.Handler):
    """Collects records emitted on a logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def dispatch_records(settings: DispatcherSettings):
    """Records emitted by the dispatcher logger during the test, at any level."""
    # Configure the flux logger first so its setup does not reset the level.
    get_logger(settings.logger_name)
    logger = logging.getLogger(settings.logger_name)
    handler = ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (deselect with '-m "
        "not integration')",
    )
