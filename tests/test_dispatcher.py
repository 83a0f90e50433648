"""Tests for concurrent dispatch with independent per-call timeouts."""

import asyncio
import time

import pytest

from core.errors import AggregateError, RequestTimeoutError, TransportError
from core.services.dispatcher import RequestOutcome, call_with_timeout, fan_out, raise_for_outcomes


def _sleeper(delay, error=None):
    async def call():
        await asyncio.sleep(delay)
        if error is not None:
            raise error

    return call


@pytest.mark.asyncio
async def test_call_with_timeout_returns_value():
    async def call():
        return 42

    assert await call_with_timeout(call(), 1) == 42


@pytest.mark.asyncio
async def test_call_with_timeout_raises_timeout_error():
    with pytest.raises(RequestTimeoutError) as exc_info:
        await call_with_timeout(asyncio.sleep(5), 0.01)
    assert exc_info.value.timeout_seconds == 0.01


@pytest.mark.asyncio
async def test_timeouts_are_independent_per_call():
    started = time.monotonic()
    outcomes = await fan_out({"fast": _sleeper(0.01), "hung": _sleeper(10)}, timeout_seconds=0.05)
    elapsed = time.monotonic() - started

    by_key = {o.key: o for o in outcomes}
    assert len(outcomes) == 2
    assert by_key["fast"].ok
    assert isinstance(by_key["hung"].error, RequestTimeoutError)
    assert elapsed < 1


@pytest.mark.asyncio
async def test_each_hung_call_contributes_one_timeout():
    outcomes = await fan_out({f"s{i}": _sleeper(10) for i in range(3)}, timeout_seconds=0.02)

    assert len(outcomes) == 3
    assert all(isinstance(o.error, RequestTimeoutError) for o in outcomes)


@pytest.mark.asyncio
async def test_errors_are_captured_per_call():
    outcomes = await fan_out(
        {"ok": _sleeper(0), "bad": _sleeper(0, TransportError("HTTP response code: 500"))},
        timeout_seconds=1,
    )

    errors = [o.error for o in outcomes if not o.ok]
    assert [str(e) for e in errors] == ["HTTP response code: 500"]


@pytest.mark.asyncio
async def test_fan_out_with_no_calls():
    assert await fan_out({}, timeout_seconds=1) == []


def test_raise_for_outcomes_success_is_noop():
    raise_for_outcomes([RequestOutcome(key="a"), RequestOutcome(key="b")])


def test_raise_for_outcomes_joins_errors():
    outcomes = [
        RequestOutcome(key="a", error=TransportError("HTTP response code: 500")),
        RequestOutcome(key="b"),
        RequestOutcome(key="c", error=RequestTimeoutError(3)),
    ]

    with pytest.raises(AggregateError) as exc_info:
        raise_for_outcomes(outcomes)

    message = str(exc_info.value)
    assert len(exc_info.value.errors) == 2
    assert "HTTP response code: 500" in message
    assert "timeout" in message
    assert message.count("; ") == 1
