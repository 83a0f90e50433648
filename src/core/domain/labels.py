"""Label codec: parsing and canonical signatures.

The signature is the only identity test used to recognise "the same"
silence across create/query/delete, since IDs are assigned by the server and
neither the operator nor the API guarantees matcher ordering.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from core.domain.models import Matcher

LabelSet = dict[str, str]


def parse_labels(text: str) -> LabelSet:
    """Parse ``"k1=v1,k2=v2"`` into a mapping.

    Entries without a non-empty name and value on both sides of the first
    ``=`` are dropped silently rather than rejected. Later duplicates win.
    """

    labels: LabelSet = {}
    for entry in text.split(","):
        name, sep, value = entry.partition("=")
        if not sep or not name or not value:
            continue
        labels[name] = value
    return labels


def _pairs(source: Mapping[str, str] | Iterable[Matcher]) -> list[tuple[str, str]]:
    if isinstance(source, Mapping):
        return [(name, value) for name, value in source.items()]
    return [(matcher.name, matcher.value) for matcher in source]


def signature_of(source: Mapping[str, str] | Iterable[Matcher]) -> str:
    """Order-independent signature of a label set or a list of matchers.

    Regex flags are not part of the signature: a regex matcher and an exact
    matcher with the same name and value compare equal.
    """

    pairs = sorted(_pairs(source), key=lambda pair: pair[0])
    return "".join(name + value for name, value in pairs)


def format_filter(labels: Mapping[str, str]) -> str:
    """Server-side ``filter`` expression: ``name=value`` pairs joined by commas."""

    return ",".join(f"{name}={labels[name]}" for name in sorted(labels))


def format_labels(matchers: Iterable[Matcher]) -> str:
    return ",".join(f"{matcher.name}={matcher.value}" for matcher in matchers)


def matchers_from_labels(labels: Mapping[str, str]) -> list[Matcher]:
    return [Matcher(name=name, value=value, is_regex=False) for name, value in labels.items()]
