"""Resource handle adapters for the state poller."""

from .fetch_handle import AsyncFetchResourceHandle, FetchResourceHandle
from .sdk_handle import AsyncSdkResourceHandle, SdkResourceHandle
from .states import normalize_state

__all__ = [
    "AsyncFetchResourceHandle",
    "AsyncSdkResourceHandle",
    "FetchResourceHandle",
    "SdkResourceHandle",
    "normalize_state",
]
