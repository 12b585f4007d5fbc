"""
Profiler package — per-column diagnostics over a :class:`~tabscope.dataset.Dataset`.

Modules
-------
missing
    The canonical missing-value predicate and per-column null counts.
type_inference
    Strict numeric parsing and NUMERIC / CATEGORICAL classification.
summary
    Numeric (nearest-rank quantiles) and categorical (top values) summaries.
duplicates
    Exact duplicate-row counting.
"""

from tabscope.profiler.duplicates import count_duplicates, duplicate_row_indices
from tabscope.profiler.missing import count_nulls, is_missing
from tabscope.profiler.summary import (
    CategoricalSummary,
    ColumnSummary,
    NumericSummary,
    summarize_column,
    summarize_dataset,
)
from tabscope.profiler.type_inference import (
    ColumnKind,
    coerce_float,
    infer_column_kinds,
    is_numeric_value,
)

__all__ = [
    "CategoricalSummary",
    "ColumnKind",
    "ColumnSummary",
    "NumericSummary",
    "coerce_float",
    "count_duplicates",
    "count_nulls",
    "duplicate_row_indices",
    "infer_column_kinds",
    "is_missing",
    "is_numeric_value",
    "summarize_column",
    "summarize_dataset",
]
