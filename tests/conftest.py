"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and
from wall-clock time.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from focustimer_cli.adapters.memory import InMemoryStore
from focustimer_cli.core.clock import Clock
from focustimer_cli.core.lifecycle import ManualLifecycleSource
from focustimer_cli.core.scheduler import LoopScheduler
from focustimer_cli.services.persistence_gateway import PersistenceGateway

# 2026-03-01T09:00:00Z, a fixed starting point for every FakeClock
START_MS = 1_772_355_600_000


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log to a per-test directory."""
    import focustimer_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("focustimer_cli").handlers.clear()
    with patch("focustimer_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    for handler in logging.getLogger("focustimer_cli").handlers:
        handler.close()
    logging.getLogger("focustimer_cli").handlers.clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Time and scheduling
# ---------------------------------------------------------------------------


class FakeClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start_ms: int = START_MS):
        self.now = start_ms

    def now_ms(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms

    def set(self, ms: int) -> None:
        self.now = ms


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler(clock) -> LoopScheduler:
    return LoopScheduler(clock)


@pytest.fixture()
def lifecycle() -> ManualLifecycleSource:
    return ManualLifecycleSource()


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def gateway(store) -> PersistenceGateway:
    """Gateway over an in-memory store; writes complete synchronously."""
    return PersistenceGateway(store)


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from focustimer_cli.services.config_service import get_config_service

    get_config_service.cache_clear()
    with patch(
        "focustimer_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        with patch(
            "focustimer_cli.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            yield get_config_service()
    get_config_service.cache_clear()
