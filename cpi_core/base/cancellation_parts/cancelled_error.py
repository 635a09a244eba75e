"""Cancellation error type.

Defines the public ``CancelledError`` raised when the enclosing orchestrator
task has been halted. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancelled task at a checkpoint.

    Distinct from :class:`~cpi_core.base.errors.CloudError` so that callers
    never retry it and can map it to a "task cancelled" status instead of a
    cloud failure.
    """

__all__ = ["CancelledError"]
