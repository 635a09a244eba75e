from __future__ import annotations

from cpi_core.config import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_RETRY_AFTER_SECONDS,
    DEFAULT_WAIT_TIMEOUT_SECONDS,
    MAX_RETRIES,
    ResilienceConfig,
    get_resilience_config,
)


def test_defaults_without_environment():
    cfg = get_resilience_config()
    assert cfg == ResilienceConfig()  # nosec B101
    assert cfg.max_retries == MAX_RETRIES == 10  # nosec B101
    assert cfg.default_retry_after == DEFAULT_RETRY_AFTER_SECONDS == 1.0  # nosec B101
    assert cfg.wait_timeout == DEFAULT_WAIT_TIMEOUT_SECONDS == 600.0  # nosec B101
    assert cfg.poll_interval == DEFAULT_POLL_INTERVAL_SECONDS == 1.0  # nosec B101


def test_cached_until_environment_changes(monkeypatch):
    first = get_resilience_config()
    assert get_resilience_config() is first  # nosec B101

    monkeypatch.setenv("CPI_MAX_RETRIES", "3")
    monkeypatch.setenv("CPI_WAIT_TIMEOUT_SECONDS", "120")
    monkeypatch.setenv("CPI_DEFAULT_RETRY_AFTER_SECONDS", "2.5")
    monkeypatch.setenv("CPI_POLL_INTERVAL_SECONDS", "0.5")
    cfg = get_resilience_config()
    assert cfg is not first  # nosec B101
    assert cfg == ResilienceConfig(max_retries=3, default_retry_after=2.5, wait_timeout=120.0, poll_interval=0.5)  # nosec B101


def test_invalid_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("CPI_MAX_RETRIES", "many")
    monkeypatch.setenv("CPI_WAIT_TIMEOUT_SECONDS", "-1")
    monkeypatch.setenv("CPI_POLL_INTERVAL_SECONDS", "fast")
    cfg = get_resilience_config()
    assert cfg.max_retries == MAX_RETRIES  # nosec B101
    assert cfg.wait_timeout == DEFAULT_WAIT_TIMEOUT_SECONDS  # nosec B101
    assert cfg.poll_interval == DEFAULT_POLL_INTERVAL_SECONDS  # nosec B101


def test_zero_retries_is_allowed(monkeypatch):
    monkeypatch.setenv("CPI_MAX_RETRIES", "0")
    assert get_resilience_config().max_retries == 0  # nosec B101
