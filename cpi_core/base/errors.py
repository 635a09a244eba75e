"""Unified cloud error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``cpi_core.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.cloud_error import (
    CloudError,
    CloudTimeoutError,
    ResourceNotFoundError,
    UnexpectedStateError,
)
from .errors_parts.classification import (
    classify_exception,
    is_not_found_error,
    is_rate_limit_error,
    response_body,
)

__all__ = [
    "ErrorCode",
    "CloudError",
    "CloudTimeoutError",
    "ResourceNotFoundError",
    "UnexpectedStateError",
    "classify_exception",
    "is_not_found_error",
    "is_rate_limit_error",
    "response_body",
]
