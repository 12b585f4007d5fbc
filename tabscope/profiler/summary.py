"""
Summary statistics engine.

Produces one summary per column:

- numeric columns get count / mean / min / q25 / median / q75 / max over the
  values that parse under :func:`~tabscope.profiler.type_inference.coerce_float`;
- categorical columns get the non-missing count, the number of distinct
  string representations, and the five most frequent values.

Quantiles use the nearest-rank rule without interpolation: ``q(p)`` is the
element at sorted index ``floor((n - 1) * p)``.  This differs from
``np.percentile``'s default linear interpolation on purpose, so the sorted
array is indexed directly.

Routing is an independent re-check by default: a column takes the numeric
path when it has at least one non-missing value and at least
``numeric_summary_ratio`` of those values parse.  With
``route_summaries_by_kind=True`` the inferred kind map decides instead.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

import numpy as np

from tabscope.config import DEFAULT_CONFIG
from tabscope.profiler.missing import is_missing
from tabscope.profiler.type_inference import ColumnKind, coerce_float

if TYPE_CHECKING:
    from tabscope.config import ProfilerConfig
    from tabscope.dataset import Dataset

__all__ = [
    "NumericSummary",
    "CategoricalSummary",
    "ColumnSummary",
    "nearest_rank_quantile",
    "summarize_numeric",
    "summarize_categorical",
    "summarize_column",
    "summarize_dataset",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumericSummary:
    """Distribution of a numeric column.

    ``mean`` is ``0.0`` for an empty sample by convention; it is not a
    computed statistic in that case.
    """

    count: int = 0
    mean: float = 0.0
    min: float = 0.0
    q25: float = 0.0
    median: float = 0.0
    q75: float = 0.0
    max: float = 0.0

    @property
    def kind(self) -> ColumnKind:
        return ColumnKind.NUMERIC

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "count": self.count,
            "mean": self.mean,
            "min": self.min,
            "q25": self.q25,
            "median": self.median,
            "q75": self.q75,
            "max": self.max,
        }


@dataclass(frozen=True)
class CategoricalSummary:
    """Cardinality and most frequent values of a categorical column."""

    count: int = 0
    distinct_count: int = 0
    top_entries: tuple[tuple[str, int], ...] = field(default_factory=tuple)
    """``(value, frequency)`` pairs, most frequent first."""

    @property
    def kind(self) -> ColumnKind:
        return ColumnKind.CATEGORICAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "count": self.count,
            "distinct": self.distinct_count,
            "top": [[value, freq] for value, freq in self.top_entries],
        }


ColumnSummary = Union[NumericSummary, CategoricalSummary]


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def nearest_rank_quantile(sorted_values: np.ndarray, p: float) -> float:
    """Element at index ``floor((n - 1) * p)`` of an ascending array."""
    n = len(sorted_values)
    return float(sorted_values[math.floor((n - 1) * p)])


def summarize_numeric(values: list[Any]) -> NumericSummary:
    """Numeric summary over the parseable entries of *values*.

    Entries that are missing or fail to parse are dropped silently.
    """
    parsed = [f for f in (coerce_float(v) for v in values) if f is not None]
    if not parsed:
        return NumericSummary()

    arr = np.sort(np.asarray(parsed, dtype=np.float64))
    return NumericSummary(
        count=len(arr),
        mean=float(np.mean(arr)),
        min=float(arr[0]),
        q25=nearest_rank_quantile(arr, 0.25),
        median=nearest_rank_quantile(arr, 0.5),
        q75=nearest_rank_quantile(arr, 0.75),
        max=float(arr[-1]),
    )


def summarize_categorical(
    values: list[Any],
    *,
    top: int = DEFAULT_CONFIG.summary_top_entries,
    missing_tokens: tuple[str, ...] = DEFAULT_CONFIG.missing_tokens,
) -> CategoricalSummary:
    """Categorical summary over the non-missing entries of *values*.

    Values are compared by their string representation.  Ties in the
    ranking keep first-encounter order (``Counter.most_common`` is stable).
    """
    present = [str(v) for v in values if not is_missing(v, missing_tokens)]
    counts = Counter(present)
    return CategoricalSummary(
        count=len(present),
        distinct_count=len(counts),
        top_entries=tuple(counts.most_common(top)),
    )


def _numeric_share(values: list[Any], missing_tokens: tuple[str, ...]) -> tuple[int, int]:
    present = 0
    numeric = 0
    for v in values:
        if is_missing(v, missing_tokens):
            continue
        present += 1
        if coerce_float(v) is not None:
            numeric += 1
    return present, numeric


def summarize_column(
    values: list[Any],
    config: ProfilerConfig = DEFAULT_CONFIG,
    *,
    kind: ColumnKind | None = None,
) -> ColumnSummary:
    """Summarise one column.

    Parameters
    ----------
    values : list
        Raw column values in row order.
    config : ProfilerConfig
        Supplies the routing ratio, the missing tokens and the top size.
    kind : ColumnKind, optional
        Forces the analysis path.  When omitted the column is routed by the
        numeric-share re-check.
    """
    if kind is None:
        present, numeric = _numeric_share(values, config.missing_tokens)
        use_numeric = present > 0 and numeric >= present * config.numeric_summary_ratio
    else:
        use_numeric = kind is ColumnKind.NUMERIC

    if use_numeric:
        return summarize_numeric(values)
    return summarize_categorical(
        values,
        top=config.summary_top_entries,
        missing_tokens=config.missing_tokens,
    )


def summarize_dataset(
    dataset: Dataset,
    kinds: dict[str, ColumnKind] | None = None,
    config: ProfilerConfig = DEFAULT_CONFIG,
) -> dict[str, ColumnSummary]:
    """Summarise every column of *dataset*, in schema order.

    A dataset without rows yields ``{}``, header-only uploads included.
    *kinds* is only consulted when ``config.route_summaries_by_kind`` is set;
    missing entries in it fall back to the re-check.
    """
    if len(dataset) == 0:
        return {}

    summaries: dict[str, ColumnSummary] = {}
    for col in dataset.columns:
        forced = kinds.get(col) if (kinds is not None and config.route_summaries_by_kind) else None
        summaries[col] = summarize_column(dataset.column(col), config, kind=forced)

    logger.debug("Summarised %d columns over %d rows", len(summaries), len(dataset))
    return summaries
