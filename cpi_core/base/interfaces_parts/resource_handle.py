"""
Protocol for remote cloud objects that can be polled for state.

The state poller is written once against this narrow capability instead of
against provider-specific SDK objects. Adapters in ``cpi_core.base.resources``
implement it for SDK models and for plain fetch callables.

External dependencies: None.
"""

from __future__ import annotations

from typing import Awaitable, Protocol, runtime_checkable


@runtime_checkable
class ResourceHandle(Protocol):
    """Structural contract for a pollable remote resource.

    Attributes:
        id: Provider-assigned identifier, immutable after creation.
        description: Human-readable label used in logs and error messages.
    """

    id: str
    description: str

    def reload(self) -> bool:
        """Re-fetch remote state; ``False`` when the resource no longer exists."""
        ...

    def state(self, field: str = "status") -> str:
        """Return the normalized (lowercase) value of ``field``."""
        ...


@runtime_checkable
class AsyncResourceHandle(Protocol):
    """Event-loop variant of :class:`ResourceHandle` with a coroutine ``reload``."""

    id: str
    description: str

    def reload(self) -> Awaitable[bool]:
        ...

    def state(self, field: str = "status") -> str:
        ...


__all__ = ["ResourceHandle", "AsyncResourceHandle"]
