from __future__ import annotations

import asyncio
import json
import time
import types

import pytest

from cpi_core.base.cancellation import CancellationToken, CancelledError
from cpi_core.base.resilience.async_support import async_with_provider_retry
from cpi_core.base.resilience.retry import (
    RetryConfig,
    provider_retry,
    retry_delay,
    with_provider_retry,
)
from cpi_core.tests.utils import FailingCall, SleepRecorder, http_error, over_limit_error


@pytest.mark.parametrize("max_retries", [0, 1, 3, 10])
def test_permanent_over_limit_makes_n_plus_one_calls(max_retries):
    err = over_limit_error(retry_after=2)
    call = FailingCall([err], forever=True)
    sleeper = SleepRecorder()

    with pytest.raises(type(err)) as ei:
        with_provider_retry(call, config=RetryConfig(max_retries=max_retries), sleep=sleeper)

    assert ei.value is err  # nosec B101 - original error surfaced unchanged
    assert call.calls == max_retries + 1  # nosec B101
    assert sleeper.calls == [2.0] * max_retries  # nosec B101


def test_fail_once_then_succeed_sleeps_once():
    call = FailingCall([over_limit_error(retry_after=5)], result="server-1")
    sleeper = SleepRecorder()

    assert with_provider_retry(call, config=RetryConfig(), sleep=sleeper) == "server-1"  # nosec B101
    assert call.calls == 2  # nosec B101
    assert sleeper.calls == [5.0]  # nosec B101


def test_success_returns_without_sleeping():
    sleeper = SleepRecorder()
    assert with_provider_retry(lambda: 42, sleep=sleeper) == 42  # nosec B101
    assert sleeper.calls == []  # nosec B101


@pytest.mark.parametrize(
    "body",
    [
        "",
        "not json at all",
        "[1, 2, 3]",
        json.dumps({"badRequest": {"code": 400, "message": "nope"}}),
        json.dumps({"overLimit": None}),
        json.dumps({"overLimit": "slow down"}),
    ],
)
def test_unusable_body_is_not_retried(body):
    err = over_limit_error(body)
    call = FailingCall([err], forever=True)
    sleeper = SleepRecorder()

    with pytest.raises(type(err)) as ei:
        with_provider_retry(call, sleep=sleeper)

    assert ei.value is err  # nosec B101
    assert call.calls == 1  # nosec B101
    assert sleeper.calls == []  # nosec B101


def test_non_rate_limit_errors_propagate_immediately():
    err = http_error(500, json.dumps({"overLimit": {"retryAfter": 1}}))
    call = FailingCall([err], forever=True)
    sleeper = SleepRecorder()

    with pytest.raises(type(err)):
        with_provider_retry(call, sleep=sleeper)
    assert call.calls == 1  # nosec B101
    assert sleeper.calls == []  # nosec B101

    plain = FailingCall([ValueError("bad listener")], forever=True)
    with pytest.raises(ValueError):
        with_provider_retry(plain, sleep=sleeper)
    assert plain.calls == 1  # nosec B101


def test_over_limit_fault_key_and_default_interval():
    body = json.dumps({"overLimitFault": {"code": 413, "message": "quota"}})
    call = FailingCall([over_limit_error(body)], result="ok")
    sleeper = SleepRecorder()

    assert with_provider_retry(call, config=RetryConfig(default_retry_after=1.0), sleep=sleeper) == "ok"  # nosec B101
    assert sleeper.calls == [1.0]  # nosec B101


@pytest.mark.parametrize(
    ("retry_after", "expected"),
    [
        ("7", 7.0),
        (3, 3.0),
        (2.9, 2.0),
        ("Thu, 01 Jan 2026 00:00:00 GMT", 1.0),
        (None, 1.0),
        ("Infinity", 1.0),
        ("nan", 1.0),
        ("1e999", 1.0),
    ],
)
def test_retry_after_coercion(retry_after, expected):
    delay = retry_delay(over_limit_error(retry_after=retry_after), 0, RetryConfig(default_retry_after=1.0))
    assert delay == expected  # nosec B101


def test_infinite_retry_after_falls_back_to_default_and_surfaces_provider_error():
    err = over_limit_error(retry_after="Infinity")
    call = FailingCall([err], forever=True)
    sleeper = SleepRecorder()

    with pytest.raises(type(err)) as ei:
        with_provider_retry(call, config=RetryConfig(max_retries=2, default_retry_after=1.0), sleep=sleeper)

    assert ei.value is err  # nosec B101
    assert call.calls == 3  # nosec B101
    assert sleeper.calls == [1.0, 1.0]  # nosec B101


def test_rate_limit_status_429_is_recognized():
    call = FailingCall([over_limit_error(status=429, retry_after=4)], result="ok")
    sleeper = SleepRecorder()
    assert with_provider_retry(call, sleep=sleeper) == "ok"  # nosec B101
    assert sleeper.calls == [4.0]  # nosec B101


def test_duck_typed_sdk_error_is_recognized():
    class RequestEntityTooLarge(Exception):
        def __init__(self, body: bytes) -> None:
            super().__init__("413 Request Entity Too Large")
            self.response = types.SimpleNamespace(status=413, body=body)

    err = RequestEntityTooLarge(b'{"overLimit": {"retryAfter": "3"}}')
    call = FailingCall([err], result="ok")
    sleeper = SleepRecorder()
    assert with_provider_retry(call, sleep=sleeper) == "ok"  # nosec B101
    assert sleeper.calls == [3.0]  # nosec B101


def test_cancelled_task_stops_before_sleeping():
    token = CancellationToken()
    token.cancel("task halted")
    call = FailingCall([over_limit_error()], forever=True)
    sleeper = SleepRecorder()

    with pytest.raises(CancelledError, match="task halted"):
        with_provider_retry(call, token=token, sleep=sleeper)
    assert call.calls == 1  # nosec B101
    assert sleeper.calls == []  # nosec B101


def test_cancellation_between_retries_is_observed_at_next_checkpoint():
    token = CancellationToken()
    call = FailingCall([over_limit_error()], forever=True)
    sleeper = SleepRecorder()
    sleeper.hooks[2] = token.cancel

    with pytest.raises(CancelledError):
        with_provider_retry(call, config=RetryConfig(max_retries=10), token=token, sleep=sleeper)
    assert call.calls == 3  # nosec B101
    assert len(sleeper.calls) == 2  # nosec B101


def test_attempt_logger_receives_each_scheduled_retry():
    seen = []
    cfg = RetryConfig(max_retries=5, attempt_logger=seen.append)
    call = FailingCall([over_limit_error(retry_after=1), over_limit_error(retry_after=2)], result="ok")

    assert with_provider_retry(call, config=cfg, sleep=SleepRecorder()) == "ok"  # nosec B101
    assert [a.attempt for a in seen] == [1, 2]  # nosec B101
    assert [a.delay for a in seen] == [1.0, 2.0]  # nosec B101
    assert all(a.max_retries == 5 for a in seen)  # nosec B101


def test_retry_budget_comes_from_environment(monkeypatch):
    monkeypatch.setenv("CPI_MAX_RETRIES", "2")
    call = FailingCall([over_limit_error()], forever=True)
    sleeper = SleepRecorder()
    with pytest.raises(Exception):
        with_provider_retry(call, sleep=sleeper)
    assert call.calls == 3  # nosec B101


def test_decorator_uses_time_sleep(monkeypatch):
    slept = []
    monkeypatch.setattr(time, "sleep", slept.append)
    call = FailingCall([over_limit_error(retry_after=6)], result="created")

    @provider_retry(RetryConfig(max_retries=3))
    def create_server(name):
        return f"{call()}:{name}"

    assert create_server("web-0") == "created:web-0"  # nosec B101
    assert create_server.__name__ == "create_server"  # nosec B101
    assert slept == [6.0]  # nosec B101


def test_async_retry_matches_blocking_behaviour():
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    errors = [over_limit_error(retry_after=2), over_limit_error(retry_after=3)]
    state = {"calls": 0}

    async def operation():
        state["calls"] += 1
        if state["calls"] <= len(errors):
            raise errors[state["calls"] - 1]
        return "done"

    result = asyncio.run(async_with_provider_retry(operation, sleep=fake_sleep))
    assert result == "done"  # nosec B101
    assert slept == [2.0, 3.0]  # nosec B101


def test_async_retry_gives_up_after_budget():
    err = over_limit_error()
    calls = []

    async def operation():
        calls.append(1)
        raise err

    async def fake_sleep(seconds):
        return None

    with pytest.raises(type(err)):
        asyncio.run(async_with_provider_retry(operation, config=RetryConfig(max_retries=2), sleep=fake_sleep))
    assert len(calls) == 3  # nosec B101
