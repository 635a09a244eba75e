"""
Error classification helpers for raw provider exceptions.

Provider SDKs raise their own exception types; the resilient core never wraps
them. These helpers only *inspect* an exception: HTTP status extraction,
response body extraction, rate-limit and not-found detection, and a
status-to-code mapping with message heuristics as a fallback for logging.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .cloud_error import CloudError

# 413 is what OpenStack compute returns with an ``overLimit`` body; 429 is the
# generic "too many requests" used by newer APIs with the same body shape.
RATE_LIMIT_STATUSES = frozenset({413, 429})


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    - ``exc.response.status``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        for attr in ("status_code", "status"):
            sc = getattr(resp, attr, None)
            if isinstance(sc, int) and 100 <= sc < 600:
                return sc
    return None


def _as_text(value: object) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value
    return None


def response_body(exc: BaseException) -> str:
    """Return the response body carried by a provider exception ("" if none).

    ``httpx.HTTPStatusError`` is read through its response; other SDK errors
    are probed for ``response.text``, ``response.body``, ``response.content``
    and a top-level ``body`` attribute, in that order.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            return exc.response.text
        except httpx.ResponseNotRead:
            return ""
    resp = getattr(exc, "response", None)
    if resp is not None:
        for attr in ("text", "body", "content"):
            text = _as_text(getattr(resp, attr, None))
            if text is not None:
                return text
    return _as_text(getattr(exc, "body", None)) or ""


def is_rate_limit_error(exc: BaseException) -> bool:
    """Whether ``exc`` has the "request too large / over limit" shape."""
    return _extract_status(exc) in RATE_LIMIT_STATUSES


def is_not_found_error(exc: BaseException) -> bool:
    """Whether ``exc`` reports a missing resource (HTTP 404)."""
    return _extract_status(exc) == 404


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    413: ErrorCode.RATE_LIMIT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for non-HTTP exceptions."""
    PATTERN_GROUPS = (
        (ErrorCode.RATE_LIMIT, ("overlimit",)),
        (ErrorCode.RATE_LIMIT, ("rate limit",)),
        (ErrorCode.TIMEOUT, ("timeout",)),
        (ErrorCode.TIMEOUT, ("timed out",)),
        (ErrorCode.AUTH, ("unauthorized",)),
        (ErrorCode.AUTH, ("forbidden",)),
        (ErrorCode.NOT_FOUND, ("not found",)),
        (ErrorCode.NOT_FOUND, ("does not exist",)),
        (ErrorCode.CONFLICT, ("conflict",)),
        (ErrorCode.CONFLICT, ("already exists",)),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.VALIDATION, ("invalid",)),
        (ErrorCode.VALIDATION, ("malformed",)),
        (ErrorCode.SERVER_ERROR, ("server error",)),
        (ErrorCode.SERVER_ERROR, ("internal error",)),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. CloudError passthrough.
        2. Cancellation.
        3. Timeout exceptions (sync/async).
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, CloudError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "RATE_LIMIT_STATUSES",
    "classify_exception",
    "is_not_found_error",
    "is_rate_limit_error",
    "response_body",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
