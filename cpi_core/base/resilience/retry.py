"""Retry executor for provider calls hitting API rate limits.

Rate-limited OpenStack-style APIs reject a request with HTTP 413/429 and a
JSON body carrying an ``overLimit`` (or ``overLimitFault``) member whose
``retryAfter`` says how long to back off. :func:`with_provider_retry` waits
that long and calls again, up to ``max_retries`` times. Anything else
(including a rate-limit error without a usable body) is re-raised unchanged
so callers keep the provider's own diagnostics.
"""
from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar

from ...config import ResilienceConfig, get_resilience_config
from ...config.defaults import DEFAULT_RETRY_AFTER_SECONDS, MAX_RETRIES
from ..cancellation import CancellationToken, resolve_token
from ..dto import parse_over_limit
from ..errors import is_rate_limit_error, response_body
from ..logging import log_event

T = TypeVar("T")


@dataclass(frozen=True)
class RetryAttempt:
    """Details of one scheduled retry, handed to ``RetryConfig.attempt_logger``."""

    attempt: int
    max_retries: int
    delay: float
    error: BaseException


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(self, attempt: RetryAttempt) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = MAX_RETRIES
    default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS
    attempt_logger: AttemptLogger | None = None

    @classmethod
    def from_resilience_config(cls, config: ResilienceConfig | None = None) -> "RetryConfig":
        cfg = config or get_resilience_config()
        return cls(max_retries=cfg.max_retries, default_retry_after=cfg.default_retry_after)


def retry_delay(exc: BaseException, attempts: int, config: RetryConfig) -> Optional[float]:
    """Return the seconds to wait before retrying ``exc``, or ``None`` to give up.

    ``None`` is returned when ``exc`` is not rate-limit shaped, carries an
    empty body, the retry budget is spent, or the body has no over-limit
    member (malformed JSON included).
    """
    if not is_rate_limit_error(exc):
        return None
    body = response_body(exc)
    if not body or attempts >= config.max_retries:
        return None
    fault = parse_over_limit(body)
    if fault is None:
        return None
    return fault.wait_seconds(config.default_retry_after)


def note_retry(
    exc: BaseException,
    attempts: int,
    delay: float,
    config: RetryConfig,
    logger: logging.Logger | None,
) -> None:
    """Report a scheduled retry to the logger and the attempt callback."""
    log_event(
        logger,
        "provider.over_limit",
        level=logging.DEBUG,
        message=f"Provider API overLimit, waiting {delay:g} seconds before retrying",
        attempt=attempts + 1,
        max_retries=config.max_retries,
        wait_seconds=delay,
    )
    if config.attempt_logger:
        config.attempt_logger(
            RetryAttempt(attempt=attempts + 1, max_retries=config.max_retries, delay=delay, error=exc)
        )


def with_provider_retry(
    operation: Callable[[], T],
    *,
    config: RetryConfig | None = None,
    token: CancellationToken | None = None,
    logger: logging.Logger | None = None,
    sleep: Callable[[float], None] | None = None,
) -> T:
    """Call ``operation``, retrying while the provider reports it is over limit.

    Args:
        operation: Zero-argument callable performing one provider API call.
        config: Retry bound and default interval; environment-derived when omitted.
        token: Cancellation token checked before every backoff sleep.
        logger: Optional sink for retry events.
        sleep: Blocking sleep function (``time.sleep`` by default).

    Returns:
        Whatever ``operation`` returns on its first successful call.

    Raises:
        CancelledError: The task was halted while a retry was pending.
        Exception: The last provider exception, unchanged, once it is not
            retryable or ``config.max_retries`` retries were made.
    """
    cfg = config or RetryConfig.from_resilience_config()
    tok = resolve_token(token)
    do_sleep = sleep or time.sleep
    attempts = 0
    while True:
        try:
            return operation()
        except Exception as exc:
            delay = retry_delay(exc, attempts, cfg)
            if delay is None:
                raise
            tok.checkpoint()
            note_retry(exc, attempts, delay, cfg, logger)
            do_sleep(delay)
            attempts += 1


def provider_retry(
    config: RetryConfig | None = None,
    *,
    token: CancellationToken | None = None,
    logger: logging.Logger | None = None,
):
    """Decorator form of :func:`with_provider_retry` (preserves the signature)."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            return with_provider_retry(
                lambda: func(*args, **kwargs), config=config, token=token, logger=logger
            )

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryAttempt",
    "RetryConfig",
    "note_retry",
    "provider_retry",
    "retry_delay",
    "with_provider_retry",
]
