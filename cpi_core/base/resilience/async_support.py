"""Event-loop renditions of the retry executor and the state poller.

Decision logic is shared with :mod:`.retry` and :mod:`.wait`; the only
difference is that every wait is an ``await`` so other tasks on the loop keep
running. As with the blocking versions, cancellation is observed at the next
checkpoint, never in the middle of a sleep.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from ..cancellation import CancellationToken, resolve_token
from .retry import RetryConfig, note_retry, retry_delay
from .wait import WaitPlan

T = TypeVar("T")


async def async_with_provider_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    config: RetryConfig | None = None,
    token: CancellationToken | None = None,
    logger: logging.Logger | None = None,
    sleep: Callable[[float], Awaitable[Any]] | None = None,
) -> T:
    """Await ``operation()``, retrying over-limit failures like ``with_provider_retry``."""
    cfg = config or RetryConfig.from_resilience_config()
    tok = resolve_token(token)
    do_sleep = sleep or asyncio.sleep
    attempts = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            delay = retry_delay(exc, attempts, cfg)
            if delay is None:
                raise
            tok.checkpoint()
            note_retry(exc, attempts, delay, cfg, logger)
            await do_sleep(delay)
            attempts += 1


async def async_wait_for_state(
    resource: Any,
    target: Any,
    *,
    state_field: str = "status",
    allow_not_found: bool = False,
    timeout: float | None = None,
    interval: float | None = None,
    token: CancellationToken | None = None,
    logger: logging.Logger | None = None,
    clock: Callable[[], float] | None = None,
    sleep: Callable[[float], Awaitable[Any]] | None = None,
) -> None:
    """Await ``resource`` reaching ``target``; see :func:`wait_for_state`.

    ``resource.reload()`` may be a coroutine function or a plain method.
    """
    plan = WaitPlan.build(
        resource,
        target,
        state_field=state_field,
        allow_not_found=allow_not_found,
        timeout=timeout,
        interval=interval,
        logger=logger,
    )
    tok = resolve_token(token)
    now = clock or time.monotonic
    do_sleep = sleep or asyncio.sleep

    started_at = now()
    while True:
        tok.checkpoint()
        duration = now() - started_at
        plan.check_timeout(duration)
        found = plan.resource.reload()
        if inspect.isawaitable(found):
            found = await found
        if plan.settle(found, duration):
            break
        await do_sleep(plan.interval)

    plan.finished(now() - started_at, found)


__all__ = ["async_wait_for_state", "async_with_provider_retry"]
