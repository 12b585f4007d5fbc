"""
Missing-value predicate.

``is_missing`` is the single definition of "no data" used by type
inference, summary statistics, histograms, frequency tables, chart
projections and null counts.  A value is missing when it is ``None``, a
float NaN, the empty string, or (case-insensitively) one of the configured
tokens ``"na"``, ``"nan"``, ``"null"``.  Surrounding whitespace is *not*
stripped: ``" "`` is a present, categorical value.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from tabscope.config import DEFAULT_CONFIG

if TYPE_CHECKING:
    from tabscope.config import ProfilerConfig
    from tabscope.dataset import Dataset

__all__ = ["is_missing", "count_missing", "count_nulls"]

logger = logging.getLogger(__name__)


def is_missing(value: Any, tokens: tuple[str, ...] = DEFAULT_CONFIG.missing_tokens) -> bool:
    """Return ``True`` if *value* represents absent data.

    >>> is_missing("NULL")
    True
    >>> is_missing("0")
    False
    """
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, str):
        return value == "" or value.lower() in tokens
    return False


def count_missing(values: list[Any], tokens: tuple[str, ...] = DEFAULT_CONFIG.missing_tokens) -> int:
    """Number of missing entries in *values*."""
    return sum(1 for v in values if is_missing(v, tokens))


def count_nulls(dataset: Dataset, config: ProfilerConfig = DEFAULT_CONFIG) -> dict[str, int]:
    """Missing-value count per column, in schema order.

    A dataset with no rows reports zero for every column.
    """
    counts = {
        col: count_missing(dataset.column(col), config.missing_tokens)
        for col in dataset.columns
    }
    logger.debug("Null counts over %d rows: %s", len(dataset), counts)
    return counts
