"""State poller: wait for a cloud resource to reach a target state.

Each tick runs, in this order: cancellation checkpoint, timeout check,
reload, target check, terminal-failure check, sleep. The timeout is measured
against a monotonic start taken before the first tick, so a zero timeout
fails on the first tick even if the resource is already in the target state.

The target is compared before the terminal-failure set so that a caller
explicitly waiting for ``error`` or ``failed`` can succeed.
"""
from __future__ import annotations

import inspect
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ...config import get_resilience_config
from ...config.defaults import TERMINAL_FAILURE_STATES
from ..cancellation import CancellationToken, resolve_token
from ..errors import CloudTimeoutError, ResourceNotFoundError, UnexpectedStateError
from ..interfaces import ResourceHandle
from ..logging import LogContext, log_event
from ..resources import AsyncSdkResourceHandle, SdkResourceHandle, normalize_state
from .error_handling import cloud_error


def as_resource_handle(resource: Any) -> Any:
    """Return ``resource`` if it already is a handle, else wrap the SDK object.

    Objects whose ``reload`` is a coroutine function get an
    :class:`AsyncSdkResourceHandle`, which only the async poller can drive.
    """
    if isinstance(resource, ResourceHandle):
        return resource
    if inspect.iscoroutinefunction(getattr(resource, "reload", None)):
        return AsyncSdkResourceHandle(resource)
    return SdkResourceHandle(resource)


@dataclass
class WaitPlan:
    """Resolved parameters of one wait, shared by the sync and async pollers."""

    resource: Any
    target: str
    state_field: str
    allow_not_found: bool
    timeout: float
    interval: float
    logger: Optional[logging.Logger]

    @classmethod
    def build(
        cls,
        resource: Any,
        target: Any,
        *,
        state_field: str,
        allow_not_found: bool,
        timeout: float | None,
        interval: float | None,
        logger: logging.Logger | None,
    ) -> "WaitPlan":
        cfg = get_resilience_config()
        return cls(
            resource=as_resource_handle(resource),
            target=normalize_state(target),
            state_field=state_field,
            allow_not_found=allow_not_found,
            timeout=cfg.wait_timeout if timeout is None else float(timeout),
            interval=cfg.poll_interval if interval is None else float(interval),
            logger=logger,
        )

    @property
    def desc(self) -> str:
        return self.resource.description

    def context(self) -> LogContext:
        return LogContext(resource=self.desc, target_state=self.target)

    def check_timeout(self, duration: float) -> None:
        """Raise ``CloudTimeoutError`` once ``duration`` reaches the timeout."""
        if duration >= self.timeout:
            cloud_error(
                f"Timed out waiting for {self.desc} to be {self.target} ({duration:.1f}s)",
                logger=self.logger,
                error_cls=CloudTimeoutError,
                resource=self.desc,
                target_state=self.target,
                elapsed=duration,
            )
        log_event(
            self.logger,
            "resource.wait",
            self.context(),
            level=logging.DEBUG,
            message=f"Waiting for {self.desc} to be {self.target} ({duration:.1f}s)",
            elapsed=round(duration, 3),
        )

    def settle(self, found: bool, duration: float) -> bool:
        """Evaluate one reload result; ``True`` when the wait is over."""
        if not found:
            if self.allow_not_found:
                return True
            cloud_error(
                f"{self.desc}: Resource not found while waiting for it to be "
                f"{self.target} ({duration:.1f}s)",
                logger=self.logger,
                error_cls=ResourceNotFoundError,
                resource=self.desc,
                target_state=self.target,
                elapsed=duration,
            )
        state = normalize_state(self.resource.state(self.state_field))
        if state == self.target:
            return True
        if state in TERMINAL_FAILURE_STATES:
            cloud_error(
                f"{self.desc} state is {state}, expected {self.target} ({duration:.1f}s)",
                logger=self.logger,
                error_cls=UnexpectedStateError,
                resource=self.desc,
                target_state=self.target,
                elapsed=duration,
                observed_state=state,
            )
        return False

    def finished(self, total: float, found: bool = True) -> None:
        outcome = f"is now {self.target}" if found else "is gone"
        log_event(
            self.logger,
            "resource.ready",
            self.context(),
            message=f"{self.desc} {outcome}, took {total:.1f}s",
            found=found,
            elapsed=round(total, 3),
        )


def wait_for_state(
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
    sleep: Callable[[float], None] | None = None,
) -> None:
    """Block until ``resource`` reaches ``target``.

    Args:
        resource: A :class:`ResourceHandle`, or an SDK object with ``id`` and
            ``reload()`` (wrapped in :class:`SdkResourceHandle`).
        target: Desired state, compared case-insensitively.
        state_field: Attribute (or method) holding the state.
        allow_not_found: Treat the resource disappearing as success (deletes).
        timeout: Seconds before giving up; configuration default when ``None``.
        interval: Seconds between reloads; configuration default when ``None``.
        token: Cancellation token checked at the start of every tick.
        logger: Optional sink; ``None`` keeps the wait silent.
        clock: Monotonic clock (``time.monotonic`` by default).
        sleep: Blocking sleep function (``time.sleep`` by default).

    Raises:
        CancelledError: The task was halted.
        CloudTimeoutError: ``timeout`` elapsed.
        ResourceNotFoundError: The resource vanished and ``allow_not_found`` is false.
        UnexpectedStateError: The resource entered ``error`` or ``failed``.
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
    do_sleep = sleep or time.sleep

    started_at = now()
    while True:
        tok.checkpoint()
        duration = now() - started_at
        plan.check_timeout(duration)
        found = plan.resource.reload()
        if inspect.iscoroutine(found):
            found.close()
            raise TypeError(f"{plan.desc} has a coroutine reload(); use async_wait_for_state")
        if plan.settle(found, duration):
            break
        do_sleep(plan.interval)

    plan.finished(now() - started_at, found)


__all__ = ["WaitPlan", "as_resource_handle", "wait_for_state"]
