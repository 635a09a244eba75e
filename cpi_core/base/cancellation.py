"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs used by the retry and polling loops via
the canonical ``cpi_core.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is passed explicitly into every retry and wait call.
	The orchestrator owns the token and cancels it when the enclosing task is
	halted; loops observe it through ``checkpoint()``.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken, resolve_token

__all__ = ["CancellationToken", "CancelledError", "resolve_token"]
