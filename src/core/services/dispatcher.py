"""Concurrent dispatch of outbound calls with per-call timeouts.

Each call runs in its own task and produces exactly one `RequestOutcome`.
Timeout windows are independent: a slow call never discards the result of a
fast one, and a hung call contributes a single timeout error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TypeVar

from core.errors import AggregateError, RequestTimeoutError, SilenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CallFactory = Callable[[], Awaitable[object]]


@dataclass(frozen=True)
class RequestOutcome:
    """Result slot of one dispatched call: success or exactly one error."""

    key: str
    error: SilenceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def call_with_timeout(call: Awaitable[T], timeout_seconds: float) -> T:
    """Await `call`, giving up after `timeout_seconds`.

    The in-flight call is cancelled when the budget runs out.
    """

    try:
        return await asyncio.wait_for(call, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        raise RequestTimeoutError(timeout_seconds) from None


async def _run_one(key: str, factory: CallFactory, timeout_seconds: float) -> RequestOutcome:
    try:
        await call_with_timeout(factory(), timeout_seconds)
    except SilenceError as exc:
        logger.debug("call %s failed: %s", key, exc)
        return RequestOutcome(key=key, error=exc)
    return RequestOutcome(key=key)


async def fan_out(calls: Mapping[str, CallFactory], timeout_seconds: float) -> list[RequestOutcome]:
    """Run every call concurrently and collect outcomes in completion order."""

    tasks = [
        asyncio.create_task(_run_one(key, factory, timeout_seconds), name=f"call-{key}")
        for key, factory in calls.items()
    ]
    outcomes: list[RequestOutcome] = []
    try:
        for next_done in asyncio.as_completed(tasks):
            outcomes.append(await next_done)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
    return outcomes


def raise_for_outcomes(outcomes: list[RequestOutcome]) -> None:
    """Join every failed outcome into one `AggregateError`; no-op if all succeeded."""

    errors = [outcome.error for outcome in outcomes if outcome.error is not None]
    if errors:
        raise AggregateError(errors)
