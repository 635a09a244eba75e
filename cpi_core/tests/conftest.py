"""Pytest configuration for the resilient core test suite."""

from __future__ import annotations

import pytest

from cpi_core.tests.utils import FakeClock, SleepRecorder


@pytest.fixture(autouse=True)
def clean_cpi_env(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from CPI_* overrides present in the developer's shell."""
    for key in (
        "CPI_MAX_RETRIES",
        "CPI_DEFAULT_RETRY_AFTER_SECONDS",
        "CPI_WAIT_TIMEOUT_SECONDS",
        "CPI_POLL_INTERVAL_SECONDS",
        "CPI_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sleeper(clock: FakeClock) -> SleepRecorder:
    return SleepRecorder(clock)
