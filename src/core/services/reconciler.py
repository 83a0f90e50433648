"""Reconciliation of desired labels against remote silences."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from core.domain.labels import signature_of
from core.domain.models import Silence


def select_matching(labels: Mapping[str, str], silences: Iterable[Silence]) -> list[Silence]:
    """Keep the silences whose matcher signature equals the signature of `labels`.

    Exact set equality: a silence covering extra labels does not match a
    narrower target, and vice versa. Snapshots are only read, never mutated.
    """

    target = signature_of(labels)
    return [silence for silence in silences if signature_of(silence.matchers) == target]
