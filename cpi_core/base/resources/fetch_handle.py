"""Adapters building a resource handle from a fetch callable.

REST call sites (for instance an ``httpx`` GET on ``/servers/{id}``) often have
no model object with a ``reload()`` method; they can wrap their request in a
callable returning the resource's JSON mapping, or ``None`` when it is gone.
A 404-shaped exception raised by the callable also counts as "not found".
The mapping must be flat and carry the polled state field; a missing field
is reported as a ``CloudError`` with the ``validation`` code.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Optional

from ..errors import CloudError, ErrorCode, is_not_found_error
from .states import normalize_state

Fetched = Optional[Mapping[str, Any]]


class FetchResourceHandle:
    """Resource handle backed by a synchronous ``fetch()`` callable."""

    def __init__(
        self,
        fetch: Callable[[], Fetched],
        *,
        resource_id: str,
        kind: str = "Resource",
        is_not_found: Callable[[BaseException], bool] = is_not_found_error,
    ) -> None:
        self._fetch = fetch
        self._is_not_found = is_not_found
        self._data: Mapping[str, Any] = {}
        self.id = str(resource_id)
        self.description = f"{kind} `{self.id}'"

    @property
    def data(self) -> Mapping[str, Any]:
        """Mapping returned by the last successful fetch."""
        return self._data

    def _store(self, data: Fetched) -> bool:
        if data is None:
            return False
        self._data = data
        return True

    def reload(self) -> bool:
        try:
            data = self._fetch()
        except Exception as exc:
            if self._is_not_found(exc):
                return False
            raise
        return self._store(data)

    def state(self, field: str = "status") -> str:
        try:
            value = self._data[field]
        except KeyError:
            raise CloudError(
                f"{self.description} has no '{field}' state field",
                code=ErrorCode.VALIDATION,
                resource=self.description,
            ) from None
        return normalize_state(value)


class AsyncFetchResourceHandle(FetchResourceHandle):
    """Variant whose ``fetch`` is a coroutine function; ``reload`` is awaitable."""

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Fetched]],
        *,
        resource_id: str,
        kind: str = "Resource",
        is_not_found: Callable[[BaseException], bool] = is_not_found_error,
    ) -> None:
        super().__init__(fetch, resource_id=resource_id, kind=kind, is_not_found=is_not_found)  # type: ignore[arg-type]

    async def reload(self) -> bool:  # type: ignore[override]
        try:
            data = await self._fetch()  # type: ignore[misc]
        except Exception as exc:
            if self._is_not_found(exc):
                return False
            raise
        return self._store(data)


__all__ = ["FetchResourceHandle", "AsyncFetchResourceHandle"]
