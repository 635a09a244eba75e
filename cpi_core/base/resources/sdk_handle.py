"""Adapter turning an SDK model object into a :class:`ResourceHandle`.

Fits fog/openstacksdk style objects: ``reload()`` refreshes the object in
place and returns it, or returns ``None`` (or raises a 404-shaped error) once
the resource is gone. State fields may be plain attributes or zero-argument
methods.

Some SDKs (e.g. boto3 resources) always return ``None`` from ``reload()``;
pass ``none_means_not_found=False`` for those and rely on ``is_not_found``
to recognise their not-found exception. Async SDK models (``async def
reload``) are wrapped in :class:`AsyncSdkResourceHandle` instead.
"""
from __future__ import annotations

from typing import Any, Callable

from ..errors import CloudError, ErrorCode, is_not_found_error
from .states import normalize_state


class SdkResourceHandle:
    """Wrap an SDK object exposing ``id``, ``reload()`` and state attributes."""

    def __init__(
        self,
        resource: Any,
        *,
        description: str | None = None,
        none_means_not_found: bool = True,
        is_not_found: Callable[[BaseException], bool] = is_not_found_error,
    ) -> None:
        self._resource = resource
        self._none_means_not_found = none_means_not_found
        self._is_not_found = is_not_found
        self.id = str(getattr(resource, "id", ""))
        self.description = description or f"{type(resource).__name__} `{self.id}'"

    @property
    def resource(self) -> Any:
        return self._resource

    def _found(self, result: Any) -> bool:
        return not (self._none_means_not_found and result is None)

    def reload(self) -> bool:
        try:
            result = self._resource.reload()
        except Exception as exc:
            if self._is_not_found(exc):
                return False
            raise
        return self._found(result)

    def state(self, field: str = "status") -> str:
        try:
            value = getattr(self._resource, field)
        except AttributeError:
            raise CloudError(
                f"{self.description} has no '{field}' state field",
                code=ErrorCode.VALIDATION,
                resource=self.description,
            ) from None
        if callable(value):
            value = value()
        return normalize_state(value)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}({self.description})"


class AsyncSdkResourceHandle(SdkResourceHandle):
    """Variant for async SDK models whose ``reload()`` is a coroutine function."""

    async def reload(self) -> bool:  # type: ignore[override]
        try:
            result = await self._resource.reload()
        except Exception as exc:
            if self._is_not_found(exc):
                return False
            raise
        return self._found(result)


__all__ = ["AsyncSdkResourceHandle", "SdkResourceHandle"]
