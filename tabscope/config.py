"""
tabscope configuration — every tunable knob in one place.

Defaults reproduce the behaviour of the upload dashboard the profiler was
extracted from.  Override via ``ProfilerConfig(histogram_bins=20, ...)``.

Origin mapping
--------------
- inference_sample_rows     → type detection looked at the first 100 rows
- numeric_summary_ratio     → summary cards used the numeric path at ≥ 60 %
- summary_top_entries       → summary cards listed the top 5 categories
- bar_chart_bins            → the bar/histogram chart used 12 bins
- preview_rows              → the table tab rendered the first 1000 rows
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProfilerConfig:
    """Immutable configuration for all tabscope components."""

    # ── Type inference ───────────────────────────────────────────────
    inference_sample_rows: int = 100
    """Rows (from the top of the dataset) inspected per column when
    deciding between NUMERIC and CATEGORICAL."""

    # ── Missing values ───────────────────────────────────────────────
    missing_tokens: tuple[str, ...] = ("na", "nan", "null")
    """Literal tokens (compared case-insensitively) that mean "no data"
    in addition to ``None`` and the empty string."""

    # ── Summary statistics ───────────────────────────────────────────
    numeric_summary_ratio: float = 0.6
    """Minimum share of non-missing values that must parse as numbers for
    a column to get a numeric summary."""

    route_summaries_by_kind: bool = False
    """Route summaries by the inferred column kind instead of re-checking
    each column against ``numeric_summary_ratio``."""

    summary_top_entries: int = 5
    """Length of ``CategoricalSummary.top_entries``."""

    # ── Charts ───────────────────────────────────────────────────────
    top_k: int = 15
    """Default size of a top-k frequency table."""

    histogram_bins: int = 10
    """Default bin count for standalone histograms."""

    bar_chart_bins: int = 12
    """Bin count used when the bar chart falls back to a histogram."""

    null_label: str = "(null)"
    """Bucket label for missing values in frequency tables and bar charts."""

    label_precision: int = 2
    """Decimal places in histogram range labels."""

    # ── Preview ──────────────────────────────────────────────────────
    preview_rows: int = 1_000
    """Rows returned by ``Dataset.preview`` when no limit is given."""


DEFAULT_CONFIG = ProfilerConfig()
