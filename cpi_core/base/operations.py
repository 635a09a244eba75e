"""Composition of the resilient core for CPI classes.

A CPI implementation (OpenStack, AWS, ...) owns one :class:`CloudOperationCore`
per orchestrator task, built with the task's cancellation token and logger,
and routes every SDK call and every wait through it::

    core = CloudOperationCore(token=task_token, logger=get_logger("cpi.openstack"))
    server = core.with_provider(lambda: compute.servers.create(**spec))
    core.wait_resource(server, "active")
"""
from __future__ import annotations

import logging
from typing import Any, Callable, NoReturn, TypeVar

from ..config import ResilienceConfig, get_resilience_config
from .cancellation import CancellationToken, resolve_token
from .resilience.error_handling import cloud_error
from .resilience.retry import RetryConfig, with_provider_retry
from .resilience.wait import wait_for_state

T = TypeVar("T")


class CloudOperationCore:
    """Bundle of retry, wait, error reporting and task checkpointing."""

    def __init__(
        self,
        *,
        token: CancellationToken | None = None,
        logger: logging.Logger | None = None,
        config: ResilienceConfig | None = None,
        sleep: Callable[[float], None] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.token = resolve_token(token)
        self.logger = logger
        self.config = config or get_resilience_config()
        self._retry = RetryConfig.from_resilience_config(self.config)
        self._sleep = sleep
        self._clock = clock

    def task_checkpoint(self) -> None:
        self.token.checkpoint()

    def cloud_error(self, message: str) -> NoReturn:
        cloud_error(message, logger=self.logger)

    def with_provider(self, operation: Callable[[], T]) -> T:
        """Run one provider call with over-limit retries."""
        return with_provider_retry(
            operation,
            config=self._retry,
            token=self.token,
            logger=self.logger,
            sleep=self._sleep,
        )

    def wait_resource(
        self,
        resource: Any,
        target_state: Any,
        state_field: str = "status",
        allow_not_found: bool = False,
        timeout: float | None = None,
    ) -> None:
        """Wait for ``resource`` to reach ``target_state`` (see ``wait_for_state``)."""
        wait_for_state(
            resource,
            target_state,
            state_field=state_field,
            allow_not_found=allow_not_found,
            timeout=self.config.wait_timeout if timeout is None else timeout,
            interval=self.config.poll_interval,
            token=self.token,
            logger=self.logger,
            clock=self._clock,
            sleep=self._sleep,
        )


__all__ = ["CloudOperationCore"]
