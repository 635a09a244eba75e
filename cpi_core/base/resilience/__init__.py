"""Resilience primitives: retry on rate limits, wait for resource states."""

from .async_support import async_wait_for_state, async_with_provider_retry
from .error_handling import cloud_error
from .retry import RetryAttempt, RetryConfig, provider_retry, with_provider_retry
from .wait import as_resource_handle, wait_for_state

__all__ = [
    "RetryAttempt",
    "RetryConfig",
    "as_resource_handle",
    "async_wait_for_state",
    "async_with_provider_retry",
    "cloud_error",
    "provider_retry",
    "wait_for_state",
    "with_provider_retry",
]
