"""
Frequency tables for categorical values.

Unlike the categorical *summary*, these tables keep missing values: they
are counted under a single bucket label (``"(null)"`` by default) and
ranked like any other category.  Non-missing values are keyed by their
string representation.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any

from tabscope.config import DEFAULT_CONFIG
from tabscope.errors import InvalidParameterError
from tabscope.profiler.missing import is_missing

__all__ = ["FrequencyEntry", "value_counts", "top_k"]


@dataclass(frozen=True)
class FrequencyEntry:
    """One category and its number of occurrences."""

    label: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.label, "value": self.count}


def _labelled_counts(
    values: list[Any],
    null_label: str,
    missing_tokens: tuple[str, ...],
) -> Counter[str]:
    # Counter keeps first-seen insertion order.
    return Counter(
        null_label if is_missing(v, missing_tokens) else str(v)
        for v in values
    )


def value_counts(
    values: list[Any],
    null_label: str = DEFAULT_CONFIG.null_label,
    *,
    missing_tokens: tuple[str, ...] = DEFAULT_CONFIG.missing_tokens,
) -> list[FrequencyEntry]:
    """Every distinct value with its count, in first-seen order."""
    counts = _labelled_counts(values, null_label, missing_tokens)
    return [FrequencyEntry(label, n) for label, n in counts.items()]


def top_k(
    values: list[Any],
    k: int = DEFAULT_CONFIG.top_k,
    null_label: str = DEFAULT_CONFIG.null_label,
    *,
    missing_tokens: tuple[str, ...] = DEFAULT_CONFIG.missing_tokens,
) -> list[FrequencyEntry]:
    """The *k* most frequent values, most frequent first.

    Ties keep first-seen order.

    >>> [e.label for e in top_k(["b", "a", "b", None], 2)]
    ['b', 'a']
    """
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise InvalidParameterError(f"k must be a positive integer, got {k!r}")
    counts = _labelled_counts(values, null_label, missing_tokens)
    return [FrequencyEntry(label, n) for label, n in counts.most_common(k)]
