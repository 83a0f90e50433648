"""Silence request orchestration.

This module owns the create/delete/show flow. The CLI builds a
`SilenceRequest` and delegates here; printing is routed through
`PipelineHooks`, so the same flow can be reused from tests or other
entry-points without side-effects.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable

from adapters.http_client import HttpxTransport
from adapters.silence_repository import SilenceRepository, build_silence
from core.config import AppSettings
from core.domain.labels import LabelSet, format_labels, parse_labels
from core.domain.mode import SilenceMode
from core.domain.models import Silence
from core.errors import RequestValidationError
from core.interfaces.transport import SilenceTransport
from core.services.dispatcher import RequestOutcome, fan_out, raise_for_outcomes
from core.services.reconciler import select_matching

logger = logging.getLogger(__name__)


@dataclass
class SilenceRequest:
    """Explicit configuration for one invocation."""

    base_url: str
    timeout_seconds: float
    mode: SilenceMode | str
    labels: str = ""
    silence_period_hours: int = 2
    creator: str = "auto-silencer"
    comment: str = "auto-silencer"

    @classmethod
    def from_settings(cls, settings: AppSettings, **overrides: object) -> "SilenceRequest":
        """Defaults from `settings`; `None` overrides are ignored."""

        values: dict[str, object] = {
            "base_url": settings.alertmanager_url,
            "timeout_seconds": settings.timeout_seconds,
            "mode": settings.mode,
            "silence_period_hours": settings.silence_period_hours,
            "creator": settings.creator,
            "comment": settings.comment,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)  # type: ignore[arg-type]


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    info: Callable[[str], None] | None = None
    silence: Callable[[Silence], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    mode: SilenceMode
    labels: LabelSet
    created: Silence | None = None
    silences: list[Silence] = field(default_factory=list)
    outcomes: list[RequestOutcome] = field(default_factory=list)


def describe_silence(silence: Silence) -> str:
    return (
        f"[creator: {silence.created_by}, comment: {silence.comment}, "
        f"start: {silence.starts_at}, end: {silence.ends_at}]"
    )


def format_silence_line(silence: Silence) -> str:
    """One printed line per silence in show mode."""

    return (
        f"ID: {silence.id}, creator: {silence.created_by}, comment: {silence.comment}, "
        f"start: {silence.starts_at}, end: {silence.ends_at}, labels: {format_labels(silence.matchers)}"
    )


def _emit(hooks: PipelineHooks, message: str) -> None:
    logger.info(message)
    if hooks.info:
        hooks.info(message)


def _validate(request: SilenceRequest) -> tuple[SilenceMode, LabelSet]:
    mode = SilenceMode.parse(request.mode)
    labels = parse_labels(request.labels or "")
    if mode.requires_labels and not labels:
        raise RequestValidationError(f"Parameter labels cannot be empty in mode: {mode.value}")
    return mode, labels


async def create_silence(
    repository: SilenceRepository,
    request: SilenceRequest,
    labels: LabelSet,
    hooks: PipelineHooks,
) -> Silence:
    silence = build_silence(request.silence_period_hours, labels, request.creator, request.comment)
    _emit(hooks, f"Creating silence {describe_silence(silence)}")
    await repository.create(silence)
    return silence


async def show_silences(
    repository: SilenceRepository,
    labels: LabelSet,
    hooks: PipelineHooks,
) -> list[Silence]:
    silences = await repository.query_active(labels)
    for silence in silences:
        if hooks.silence:
            hooks.silence(silence)
    return silences


async def delete_silences(
    repository: SilenceRepository,
    request: SilenceRequest,
    labels: LabelSet,
    hooks: PipelineHooks,
) -> tuple[list[Silence], list[RequestOutcome]]:
    """Delete every active silence created with exactly `labels`.

    One DELETE per match, concurrently, each with its own timeout budget.
    Failures are reported together as an `AggregateError`.
    """

    matched = select_matching(labels, await repository.query_active(labels))
    if not matched:
        _emit(hooks, "No silences to delete with given labels")
        return [], []

    calls = {}
    for silence in matched:
        _emit(hooks, f"Deleting silence {describe_silence(silence)}")
        calls[silence.id] = lambda silence_id=silence.id: repository.delete(silence_id)

    outcomes = await fan_out(calls, request.timeout_seconds)
    raise_for_outcomes(outcomes)
    return matched, outcomes


async def execute(
    request: SilenceRequest,
    *,
    transport: SilenceTransport | None = None,
    settings: AppSettings | None = None,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    """Run one request end to end; raises a `SilenceError` on failure."""

    hooks = hooks or PipelineHooks()
    mode, labels = _validate(request)

    transport = transport or HttpxTransport(settings)
    repository = SilenceRepository(request.base_url, transport, request.timeout_seconds)
    logger.debug("mode=%s labels=%s url=%s", mode.value, labels, request.base_url)

    result = PipelineResult(mode=mode, labels=labels)
    if mode is SilenceMode.CREATE:
        result.created = await create_silence(repository, request, labels, hooks)
    elif mode is SilenceMode.DELETE:
        result.silences, result.outcomes = await delete_silences(repository, request, labels, hooks)
    else:
        result.silences = await show_silences(repository, labels, hooks)
    return result


def run(
    base_url: str,
    timeout_seconds: float,
    mode: str,
    labels: str,
    silence_period_hours: int,
    creator: str,
    comment: str,
    *,
    hooks: PipelineHooks | None = None,
) -> None:
    """Synchronous entry point; returns `None` on success, raises otherwise."""

    request = SilenceRequest(
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        mode=mode,
        labels=labels,
        silence_period_hours=silence_period_hours,
        creator=creator,
        comment=comment,
    )
    asyncio.run(execute(request, hooks=hooks))
