"""cpi_core package

Resilient operation core for Cloud Provider Interface (CPI) call sites.

Purpose:
    CPI implementations call a cloud SDK to create, inspect and delete
    resources. Two things make those calls unsafe without help: API rate
    limits, and resources that are provisioned asynchronously. This package
    provides the retry executor and the state poller that handle both,
    together with the uniform ``CloudError`` they report and the
    cancellation token through which an orchestrator halts them.

Public API (re-exported):
    - Version: ``__version__``
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
    - Errors: :class:`CloudError` and its sub-kinds, :class:`ErrorCode`
    - Retry: :func:`with_provider_retry`, :func:`provider_retry`, :class:`RetryConfig`
    - Waiting: :func:`wait_for_state`, resource handle adapters
    - Async: :func:`async_with_provider_retry`, :func:`async_wait_for_state`
    - Composition: :class:`CloudOperationCore`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    CloudError,
    CloudTimeoutError,
    ErrorCode,
    ResourceNotFoundError,
    UnexpectedStateError,
    classify_exception,
)
from .base.interfaces import AsyncResourceHandle, ResourceHandle
from .base.operations import CloudOperationCore
from .base.resilience import (
    RetryAttempt,
    RetryConfig,
    async_wait_for_state,
    async_with_provider_retry,
    cloud_error,
    provider_retry,
    wait_for_state,
    with_provider_retry,
)
from .base.resources import (
    AsyncFetchResourceHandle,
    AsyncSdkResourceHandle,
    FetchResourceHandle,
    SdkResourceHandle,
)
from .config import ResilienceConfig, get_resilience_config

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancellationToken",
    "CancelledError",
    "CloudError",
    "CloudTimeoutError",
    "ErrorCode",
    "ResourceNotFoundError",
    "UnexpectedStateError",
    "classify_exception",
    "AsyncResourceHandle",
    "ResourceHandle",
    "CloudOperationCore",
    "RetryAttempt",
    "RetryConfig",
    "async_wait_for_state",
    "async_with_provider_retry",
    "cloud_error",
    "provider_retry",
    "wait_for_state",
    "with_provider_retry",
    "AsyncFetchResourceHandle",
    "FetchResourceHandle",
    "AsyncSdkResourceHandle",
    "SdkResourceHandle",
    "ResilienceConfig",
    "get_resilience_config",
]
