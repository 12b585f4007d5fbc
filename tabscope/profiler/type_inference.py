"""
Column type inference.

Classifies every column as ``NUMERIC`` or ``CATEGORICAL`` from a sample of
its leading values.  This module also owns the canonical numeric
definition: :func:`is_numeric_value` and :func:`coerce_float` are what the
summary engine, the histogram builder and the chart projections call.

Numeric strings must match ``^[-+]?\\d+(\\.\\d+)?$`` once surrounding
whitespace is stripped.  Scientific notation (``"1e5"``), thousands
separators (``"1,000"``), bare decimal points (``"1."``, ``".5"``) and
embedded text are non-numeric even though ``float()`` would accept some of
them.  Already-typed ``int``/``float`` values (as produced by a typed polars
frame) count as numeric when finite; ``bool`` never does.
"""

from __future__ import annotations

import logging
import math
import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from tabscope.config import DEFAULT_CONFIG
from tabscope.profiler.missing import is_missing

if TYPE_CHECKING:
    from tabscope.config import ProfilerConfig
    from tabscope.dataset import Dataset

__all__ = [
    "ColumnKind",
    "NUMERIC_PATTERN",
    "is_numeric_value",
    "coerce_float",
    "infer_column_kind",
    "infer_column_kinds",
]

logger = logging.getLogger(__name__)

NUMERIC_PATTERN = re.compile(r"^[-+]?\d+(\.\d+)?$", re.ASCII)


class ColumnKind(Enum):
    """Analysis path selected for a column."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


# ---------------------------------------------------------------------------
# Canonical numeric parsing
# ---------------------------------------------------------------------------

def is_numeric_value(value: Any) -> bool:
    """Return ``True`` if *value* parses under the strict numeric rule.

    Missing values are never numeric.

    >>> is_numeric_value(" -3.25 ")
    True
    >>> is_numeric_value("1e5")
    False
    """
    return coerce_float(value) is not None


def coerce_float(value: Any) -> float | None:
    """Parse *value* to a float, or return ``None`` if it is not numeric.

    ``None`` is also returned for non-finite numbers so every caller sees
    only values it can do arithmetic on.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        f = float(value)
        return f if math.isfinite(f) else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not NUMERIC_PATTERN.match(text):
        return None
    f = float(text)
    # Long digit strings can overflow to inf.
    return f if math.isfinite(f) else None


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------

def infer_column_kind(
    values: list[Any],
    *,
    sample_rows: int = DEFAULT_CONFIG.inference_sample_rows,
    missing_tokens: tuple[str, ...] = DEFAULT_CONFIG.missing_tokens,
) -> ColumnKind:
    """Classify one column from its first *sample_rows* values.

    NUMERIC only when numeric values strictly outnumber non-numeric ones
    among the non-missing sample, so ties and all-missing samples are
    CATEGORICAL.
    """
    numeric = 0
    other = 0
    for v in values[:sample_rows]:
        if is_missing(v, missing_tokens):
            continue
        if is_numeric_value(v):
            numeric += 1
        else:
            other += 1
    return ColumnKind.NUMERIC if numeric > other else ColumnKind.CATEGORICAL


def infer_column_kinds(
    dataset: Dataset,
    config: ProfilerConfig = DEFAULT_CONFIG,
) -> dict[str, ColumnKind]:
    """Map every column of *dataset* to its :class:`ColumnKind`."""
    kinds = {
        col: infer_column_kind(
            dataset.column(col),
            sample_rows=config.inference_sample_rows,
            missing_tokens=config.missing_tokens,
        )
        for col in dataset.columns
    }
    logger.debug(
        "Inferred %d numeric / %d categorical columns",
        sum(1 for k in kinds.values() if k is ColumnKind.NUMERIC),
        sum(1 for k in kinds.values() if k is ColumnKind.CATEGORICAL),
    )
    return kinds
