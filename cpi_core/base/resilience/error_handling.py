"""Error reporter: the single exit point for state-machine failures.

Every failure detected by the core itself (timeout, vanished resource,
terminal state) goes through :func:`cloud_error`, which logs it once when a
logger is configured and raises the uniform :class:`CloudError` kind. Raw
provider exceptions never pass through here; they propagate unchanged.
"""
from __future__ import annotations

import logging
from typing import Any, NoReturn, Type

from ..errors import CloudError


def cloud_error(
    message: str,
    *,
    logger: logging.Logger | None = None,
    error_cls: Type[CloudError] = CloudError,
    **fields: Any,
) -> NoReturn:
    """Log ``message`` at ERROR (if a logger is given) and raise ``error_cls``.

    Args:
        message: Human-readable description of what went wrong.
        logger: Optional sink; ``None`` keeps the report silent.
        error_cls: ``CloudError`` or one of its sub-kinds.
        **fields: Structured attributes forwarded to the error
            (``resource``, ``target_state``, ``elapsed``, ...).

    Raises:
        CloudError: Always.
    """
    if logger is not None:
        logger.error(message)
    raise error_cls(message, **fields)


__all__ = ["cloud_error"]
