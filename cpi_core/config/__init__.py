"""Resilience configuration for CPI call sites.

Key Components
--------------
ResilienceConfig
    Frozen dataclass with the retry bound, the default retry interval, the
    default wait timeout and the polling interval.

get_resilience_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when one of them changes. Supported environment
    variables (all optional):
        CPI_MAX_RETRIES
        CPI_DEFAULT_RETRY_AFTER_SECONDS
        CPI_WAIT_TIMEOUT_SECONDS
        CPI_POLL_INTERVAL_SECONDS

Failure Modes
-------------
Unparseable or out-of-range values never raise; the built-in default from
``cpi_core.config.defaults`` is used instead. Explicit per-call arguments
always win over this configuration.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from .defaults import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_RETRY_AFTER_SECONDS,
    DEFAULT_WAIT_TIMEOUT_SECONDS,
    MAX_RETRIES,
    TERMINAL_FAILURE_STATES,
)

_ENV_KEYS = (
    "CPI_MAX_RETRIES",
    "CPI_DEFAULT_RETRY_AFTER_SECONDS",
    "CPI_WAIT_TIMEOUT_SECONDS",
    "CPI_POLL_INTERVAL_SECONDS",
)


@dataclass(frozen=True)
class ResilienceConfig:
    """Container for retry and polling settings.

    Attributes:
        max_retries: Retries allowed for an over-limit call (total calls is
            ``max_retries + 1``).
        default_retry_after: Seconds to sleep when the provider sends no
            usable ``retryAfter`` hint.
        wait_timeout: Default seconds for a resource to reach its target state.
        poll_interval: Seconds between two reloads of a polled resource.
    """

    max_retries: int = MAX_RETRIES
    default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT_SECONDS
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS


_CACHED: ResilienceConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a non-negative float from ``name``; ``default`` when unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val >= 0 else default


def _parse_env_int(name: str, default: int) -> int:
    """Parse a non-negative int from ``name``; ``default`` when unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw.strip())
    except ValueError:
        return default
    return val if val >= 0 else default


def get_resilience_config() -> ResilienceConfig:
    """Return the process-cached :class:`ResilienceConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    cur_guard = "/".join(os.getenv(key, "") for key in _ENV_KEYS)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = ResilienceConfig(
        max_retries=_parse_env_int("CPI_MAX_RETRIES", MAX_RETRIES),
        default_retry_after=_parse_env_float(
            "CPI_DEFAULT_RETRY_AFTER_SECONDS", DEFAULT_RETRY_AFTER_SECONDS
        ),
        wait_timeout=_parse_env_float("CPI_WAIT_TIMEOUT_SECONDS", DEFAULT_WAIT_TIMEOUT_SECONDS),
        poll_interval=_parse_env_float("CPI_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = [
    "ResilienceConfig",
    "get_resilience_config",
    "MAX_RETRIES",
    "DEFAULT_RETRY_AFTER_SECONDS",
    "DEFAULT_WAIT_TIMEOUT_SECONDS",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "TERMINAL_FAILURE_STATES",
]
