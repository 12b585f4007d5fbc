"""
AnalysisSession — the current dataset plus the user's chart parameters.

A session is an immutable value.  Every derived structure (kind map,
summaries, null counts, duplicate count, chart series) is a pure function
of it and is memoised on the instance the first time it is read.  Changing
anything (a new upload, another column, a different bin count) means
building a new session through :meth:`AnalysisSession.with_dataset` or
:meth:`AnalysisSession.with_selection`, which starts with an empty cache.

Usage::

    session = AnalysisSession.from_dataset(read_csv("sales.csv"))
    session.summaries["amount"]
    session.with_selection(mode="scatter", y="discount").chart
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from tabscope.charts.frequency import FrequencyEntry, top_k
from tabscope.charts.histogram import Bin, BinCount, histogram, resolve_bin_count, SQRT_RULE
from tabscope.charts.projection import ChartMode, ChartSeries, build_chart
from tabscope.config import DEFAULT_CONFIG, ProfilerConfig
from tabscope.dataset import Dataset
from tabscope.errors import InvalidParameterError
from tabscope.profiler.duplicates import count_duplicates
from tabscope.profiler.missing import count_nulls
from tabscope.profiler.summary import ColumnSummary, summarize_dataset
from tabscope.profiler.type_inference import ColumnKind, infer_column_kinds

__all__ = ["DatasetProfile", "AnalysisSession", "default_axes"]

logger = logging.getLogger(__name__)

_UNSET: Any = object()


# ---------------------------------------------------------------------------
# DatasetProfile — everything the summary tab shows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatasetProfile:
    """Whole-dataset diagnostics gathered in one place."""

    row_count: int
    columns: tuple[str, ...]
    kinds: dict[str, ColumnKind]
    summaries: dict[str, ColumnSummary]
    null_counts: dict[str, int]
    duplicate_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_count": self.row_count,
            "columns": list(self.columns),
            "types": {col: kind.value for col, kind in self.kinds.items()},
            "summary": {col: s.to_dict() for col, s in self.summaries.items()},
            "nulls": dict(self.null_counts),
            "duplicates": self.duplicate_count,
        }


def default_axes(columns: tuple[str, ...], kinds: dict[str, ColumnKind]) -> tuple[str, str]:
    """Initial ``(x, y)`` selection for a freshly loaded dataset.

    x is the first column; y is the first numeric column, else the second
    column, else nothing.
    """
    x = columns[0] if columns else ""
    numeric = [c for c in columns if kinds.get(c) is ColumnKind.NUMERIC]
    if numeric:
        y = numeric[0]
    elif len(columns) > 1:
        y = columns[1]
    else:
        y = ""
    return x, y


# ---------------------------------------------------------------------------
# AnalysisSession
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisSession:
    """Immutable analysis state; derived views are memoised per instance."""

    dataset: Dataset = field(default_factory=Dataset)
    config: ProfilerConfig = DEFAULT_CONFIG
    x_column: str = ""
    y_column: str = ""
    chart_mode: ChartMode = ChartMode.BAR
    bin_count: BinCount = DEFAULT_CONFIG.histogram_bins
    top_k: int = DEFAULT_CONFIG.top_k
    drop_gaps: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "chart_mode", ChartMode.parse(self.chart_mode))
        if self.bin_count != SQRT_RULE:
            resolve_bin_count(self.bin_count, 0)
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int) or self.top_k < 1:
            raise InvalidParameterError(f"top_k must be a positive integer, got {self.top_k!r}")
        for col in (self.x_column, self.y_column):
            if col:
                self.dataset.require_column(col)

    # ------------------------------------------------------------------
    # Construction / transitions
    # ------------------------------------------------------------------

    @classmethod
    def from_dataset(
        cls,
        dataset: Dataset,
        config: ProfilerConfig = DEFAULT_CONFIG,
        **params: Any,
    ) -> AnalysisSession:
        """New session on *dataset* with the default axis selection."""
        kinds = infer_column_kinds(dataset, config)
        x, y = default_axes(dataset.columns, kinds)
        params.setdefault("x_column", x)
        params.setdefault("y_column", y)
        params.setdefault("bin_count", config.histogram_bins)
        params.setdefault("top_k", config.top_k)
        session = cls(dataset=dataset, config=config, **params)
        # Seed the cache so the kind map is not inferred twice.
        session.__dict__["kinds"] = kinds
        logger.info(
            "Session on %d rows × %d columns (x=%r, y=%r)",
            len(dataset), len(dataset.columns), session.x_column, session.y_column,
        )
        return session

    def with_dataset(self, dataset: Dataset) -> AnalysisSession:
        """Replace the dataset wholesale; axes go back to their defaults."""
        return AnalysisSession.from_dataset(
            dataset,
            self.config,
            chart_mode=self.chart_mode,
            bin_count=self.bin_count,
            top_k=self.top_k,
            drop_gaps=self.drop_gaps,
        )

    def with_selection(
        self,
        *,
        x: str = _UNSET,
        y: str = _UNSET,
        mode: ChartMode | str = _UNSET,
        bin_count: BinCount = _UNSET,
        top_k: int = _UNSET,
        drop_gaps: bool = _UNSET,
    ) -> AnalysisSession:
        """Same dataset, new parameters.  Only the given ones change."""
        changes = {
            name: value
            for name, value in (
                ("x_column", x),
                ("y_column", y),
                ("chart_mode", mode),
                ("bin_count", bin_count),
                ("top_k", top_k),
                ("drop_gaps", drop_gaps),
            )
            if value is not _UNSET
        }
        session = dataclasses.replace(self, **changes)
        # The kind map depends on the dataset alone.
        if "kinds" in self.__dict__:
            session.__dict__["kinds"] = self.__dict__["kinds"]
        return session

    def reset_axes(self) -> AnalysisSession:
        x, y = default_axes(self.dataset.columns, self.kinds)
        return self.with_selection(x=x, y=y)

    # ------------------------------------------------------------------
    # Derived views (memoised)
    # ------------------------------------------------------------------

    @cached_property
    def kinds(self) -> dict[str, ColumnKind]:
        return infer_column_kinds(self.dataset, self.config)

    @property
    def numeric_columns(self) -> list[str]:
        return [c for c, k in self.kinds.items() if k is ColumnKind.NUMERIC]

    @property
    def categorical_columns(self) -> list[str]:
        return [c for c, k in self.kinds.items() if k is ColumnKind.CATEGORICAL]

    @cached_property
    def summaries(self) -> dict[str, ColumnSummary]:
        return summarize_dataset(self.dataset, self.kinds, self.config)

    @cached_property
    def null_counts(self) -> dict[str, int]:
        return count_nulls(self.dataset, self.config)

    @cached_property
    def duplicate_count(self) -> int:
        return count_duplicates(self.dataset)

    @cached_property
    def chart(self) -> ChartSeries:
        return build_chart(
            self.dataset,
            self.kinds,
            self.chart_mode,
            self.x_column,
            self.y_column,
            self.config,
            drop_gaps=self.drop_gaps,
        )

    @cached_property
    def profile(self) -> DatasetProfile:
        return DatasetProfile(
            row_count=len(self.dataset),
            columns=self.dataset.columns,
            kinds=self.kinds,
            summaries=self.summaries,
            null_counts=self.null_counts,
            duplicate_count=self.duplicate_count,
        )

    # ------------------------------------------------------------------
    # Parameterised views
    # ------------------------------------------------------------------

    def histogram(self, column: str | None = None) -> list[Bin]:
        """Histogram of *column* (default: the selected x) at ``bin_count``."""
        column = column or self.x_column
        if not column:
            return []
        return histogram(self.dataset, column, self.bin_count, self.config)

    def top_values(self, column: str | None = None) -> list[FrequencyEntry]:
        """Top ``top_k`` values of *column* (default: the selected x)."""
        column = column or self.x_column
        if not column:
            return []
        return top_k(
            self.dataset.column(column),
            self.top_k,
            self.config.null_label,
            missing_tokens=self.config.missing_tokens,
        )

    def preview(self, limit: int | None = None) -> list[dict[str, Any]]:
        return self.dataset.preview(self.config.preview_rows if limit is None else limit)
