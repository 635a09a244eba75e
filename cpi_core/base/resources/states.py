"""State normalization shared by resource adapters and the poller."""
from __future__ import annotations

from enum import Enum
from typing import Any


def normalize_state(value: Any) -> str:
    """Return ``value`` as a stripped, lowercase state string.

    Enum members are unwrapped to their value, so ``Status.ACTIVE`` and
    ``"ACTIVE "`` both normalize to ``"active"``.
    """
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return ""
    return str(value).strip().lower()


__all__ = ["normalize_state"]
