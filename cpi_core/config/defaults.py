"""Centralized numeric defaults for the resilient operation core.

Single source of truth for retry and polling constants; nothing else in the
package hard-codes these numbers.
"""
from __future__ import annotations

# Max number of retries for an over-limit provider call
MAX_RETRIES = 10

# Seconds to wait before retrying when the provider gives no ``retryAfter``
DEFAULT_RETRY_AFTER_SECONDS = 1.0

# Seconds to wait for a resource to reach its target state
DEFAULT_WAIT_TIMEOUT_SECONDS = 600.0

# Seconds between two reloads of a resource being waited on
DEFAULT_POLL_INTERVAL_SECONDS = 1.0

# States after which no progress towards any other target is possible
TERMINAL_FAILURE_STATES = frozenset({"error", "failed"})

__all__ = [
    "MAX_RETRIES",
    "DEFAULT_RETRY_AFTER_SECONDS",
    "DEFAULT_WAIT_TIMEOUT_SECONDS",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "TERMINAL_FAILURE_STATES",
]
