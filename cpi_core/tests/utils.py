"""Fakes shared by the resilient core tests.

No network and no real sleeping: provider errors are built from ``httpx``
objects, clocks and sleeps are injected, and resources are small in-memory
stand-ins for SDK models.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional

import httpx


class FakeClock:
    """Monotonic clock advanced explicitly (or by ``SleepRecorder``)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    """Records requested sleeps; optionally advances a ``FakeClock``."""

    def __init__(self, clock: Optional[FakeClock] = None) -> None:
        self.calls: List[float] = []
        self.clock = clock
        self.hooks: dict[int, object] = {}

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)
        hook = self.hooks.get(len(self.calls))
        if callable(hook):
            hook()


class FakeServer:
    """SDK-style model: ``reload()`` returns self, or ``None`` once gone."""

    def __init__(self, statuses: Iterable[Optional[str]], server_id: str = "i-123") -> None:
        self.id = server_id
        self._statuses = list(statuses)
        self.status: Optional[str] = None
        self.reloads = 0

    def reload(self) -> Optional["FakeServer"]:
        self.reloads += 1
        index = min(self.reloads, len(self._statuses)) - 1
        current = self._statuses[index]
        if current is None:
            return None
        self.status = current
        return self


def over_limit_error(body: object = None, *, status: int = 413, retry_after: object = 5) -> httpx.HTTPStatusError:
    """Build an ``httpx.HTTPStatusError`` shaped like an OpenStack overLimit reply.

    ``body`` may be a ready string/bytes; by default an ``overLimit`` document
    with ``retry_after`` is produced.
    """
    if body is None:
        body = json.dumps({"overLimit": {"code": status, "message": "slow down", "retryAfter": retry_after}})
    content = body.encode("utf-8") if isinstance(body, str) else body
    request = httpx.Request("POST", "https://compute.example.test/v2/servers")
    response = httpx.Response(status, request=request, content=content)
    return httpx.HTTPStatusError("over limit", request=request, response=response)


def http_error(status: int, body: str = "") -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://compute.example.test/v2/servers/i-123")
    response = httpx.Response(status, request=request, content=body.encode("utf-8"))
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


class FailingCall:
    """Raises the queued exceptions in order, then returns ``result``."""

    def __init__(self, errors: Iterable[BaseException], result: object = "ok", forever: bool = False) -> None:
        self.errors = list(errors)
        self.result = result
        self.forever = forever
        self.calls = 0

    def __call__(self) -> object:
        self.calls += 1
        if self.forever:
            raise self.errors[0]
        if self.calls <= len(self.errors):
            raise self.errors[self.calls - 1]
        return self.result


