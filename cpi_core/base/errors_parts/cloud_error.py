"""
Uniform cloud error raised at the edge of the resilient operation core.

``CloudError`` is what the orchestrator sees when a wait or a state machine
fails. The subclasses keep the specific condition available for diagnostics
and targeted ``except`` clauses; callers that only care about "the operation
failed" catch ``CloudError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class CloudError(Exception):
    """Represents a failed cloud operation with a human-readable message.

    Attributes:
        message: Human-readable description (resource, desired state and
            elapsed time are embedded when known).
        code: Normalized :class:`ErrorCode` classification for the failure.
        resource: Description of the resource involved (e.g. ``"Server `i-1'"``).
        target_state: Desired state when the failure happened while waiting.
        elapsed: Seconds spent waiting before the failure, when applicable.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    resource: Optional[str] = None
    target_state: Optional[str] = None
    elapsed: Optional[float] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "code": self.code.value,
            "message": self.message,
            "resource": self.resource,
            "target_state": self.target_state,
            "elapsed": self.elapsed,
        }


@dataclass(eq=False)
class CloudTimeoutError(CloudError):
    """The resource did not reach the target state within the timeout."""

    code: ErrorCode = ErrorCode.TIMEOUT


@dataclass(eq=False)
class ResourceNotFoundError(CloudError):
    """The resource disappeared while a state was being awaited."""

    code: ErrorCode = ErrorCode.NOT_FOUND


@dataclass(eq=False)
class UnexpectedStateError(CloudError):
    """The resource entered a terminal-failure state (``error``/``failed``)."""

    code: ErrorCode = ErrorCode.UNEXPECTED_STATE
    observed_state: Optional[str] = None

    def to_error_dict(self) -> dict[str, object]:
        data = super().to_error_dict()
        data["observed_state"] = self.observed_state
        return data


__all__ = [
    "CloudError",
    "CloudTimeoutError",
    "ResourceNotFoundError",
    "UnexpectedStateError",
]
