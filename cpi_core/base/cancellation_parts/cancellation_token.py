"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class handed to the retry executor and the
state poller so that a halted orchestrator task stops them at their next
checkpoint. Cancellation never interrupts a sleep in progress.
"""

from __future__ import annotations

from threading import Lock
from typing import List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for concurrent ``cancel`` + ``checkpoint`` usage from several
    in-flight operations. Child tokens inherit cancellation when the parent is
    cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Mark the task halted and cascade to children (first reason wins)."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def checkpoint(self) -> None:
        """Raise ``CancelledError`` if the task was halted, otherwise no-op."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "task cancelled")

    # Historical name, still used by call sites that predate ``checkpoint``.
    raise_if_cancelled = checkpoint

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


def resolve_token(token: CancellationToken | None) -> CancellationToken:
    """Return ``token`` or a fresh, never-cancelled token when ``None``."""
    return token if token is not None else CancellationToken()


__all__ = ["CancellationToken", "resolve_token"]
