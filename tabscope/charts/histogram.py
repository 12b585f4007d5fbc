"""
Equal-width histogram builder.

Values are coerced with the canonical numeric rule; anything that does not
parse (missing values included) or is non-finite is left out.  The range
``[min, max]`` is split into ``bin_count`` intervals of equal width.  A
constant column would give width 0, so the width is forced to 1 and every
value lands in the first bin.  Indices are clamped into
``[0, bin_count - 1]`` so the maximum (and any floating-point overshoot)
falls into the last bin.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Union

import numpy as np

from tabscope.config import DEFAULT_CONFIG
from tabscope.errors import InvalidParameterError
from tabscope.profiler.type_inference import coerce_float

if TYPE_CHECKING:
    from tabscope.config import ProfilerConfig
    from tabscope.dataset import Dataset

__all__ = [
    "Bin",
    "BinCount",
    "SQRT_RULE",
    "resolve_bin_count",
    "histogram_values",
    "histogram",
]

logger = logging.getLogger(__name__)

SQRT_RULE = "sqrt"

BinCount = Union[int, Literal["sqrt"]]


@dataclass(frozen=True)
class Bin:
    """One histogram bucket."""

    range_label: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"bin": self.range_label, "count": self.count}


def resolve_bin_count(bin_count: BinCount, n_values: int) -> int:
    """Turn a caller-supplied bin count into a positive int.

    ``"sqrt"`` derives ``ceil(sqrt(n_values))`` (at least 1).
    """
    if bin_count == SQRT_RULE:
        return max(1, math.ceil(math.sqrt(n_values)))
    if isinstance(bin_count, bool) or not isinstance(bin_count, int) or bin_count < 1:
        raise InvalidParameterError(
            f"bin_count must be a positive integer or {SQRT_RULE!r}, got {bin_count!r}"
        )
    return bin_count


def histogram_values(
    values: list[Any],
    bin_count: BinCount = DEFAULT_CONFIG.histogram_bins,
    *,
    precision: int = DEFAULT_CONFIG.label_precision,
) -> list[Bin]:
    """Bin raw *values* into equal-width intervals.

    Returns ``[]`` when no value parses.  Labels are half-open intervals
    ``"[lo, hi)"`` with both bounds rounded to *precision* decimals.
    """
    parsed = [f for f in (coerce_float(v) for v in values) if f is not None]
    if bin_count != SQRT_RULE:
        # Validate eagerly so bad parameters fail even on empty columns.
        resolve_bin_count(bin_count, len(parsed))
    if not parsed:
        return []

    bins = resolve_bin_count(bin_count, len(parsed))
    arr = np.asarray(parsed, dtype=np.float64)
    lo = float(arr.min())
    hi = float(arr.max())
    # Bin in a halved space when the span itself overflows float64.
    scale = 1.0 if math.isfinite(hi - lo) else 0.5
    lo_s = lo * scale
    width = (hi * scale - lo_s) / bins
    if width == 0:
        width = 1.0

    idx = np.clip(np.floor((arr * scale - lo_s) / width).astype(np.int64), 0, bins - 1)
    counts = np.bincount(idx, minlength=bins)

    edges = [(lo_s + i * width) / scale for i in range(bins + 1)]
    return [
        Bin(
            range_label=f"[{edges[i]:.{precision}f}, {edges[i + 1]:.{precision}f})",
            count=int(counts[i]),
        )
        for i in range(bins)
    ]


def histogram(
    dataset: Dataset,
    column: str,
    bin_count: BinCount = DEFAULT_CONFIG.histogram_bins,
    config: ProfilerConfig = DEFAULT_CONFIG,
) -> list[Bin]:
    """Histogram of one column of *dataset*.

    Raises :class:`~tabscope.errors.UnknownColumnError` for a column outside
    the schema and :class:`~tabscope.errors.InvalidParameterError` for a bad
    *bin_count*; never raises because of the data itself.
    """
    bins = histogram_values(
        dataset.column(column),
        bin_count,
        precision=config.label_precision,
    )
    logger.debug("Histogram of %r: %d bins", column, len(bins))
    return bins
