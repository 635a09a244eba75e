"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `cpi_core.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .cloud_error import (
    CloudError,
    CloudTimeoutError,
    ResourceNotFoundError,
    UnexpectedStateError,
)
from .classification import (
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
