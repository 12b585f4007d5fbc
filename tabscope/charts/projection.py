"""
Chart projections — the exact series each chart mode renders.

Modes
-----
BAR
    Categorical x: one bar per distinct x value in first-seen order, missing
    values bucketed under the null label.  Numeric x: a histogram with
    ``config.bar_chart_bins`` bins, one bar per bin.
LINE
    One point per row: x is the raw value, y is coerced.  A y that does not
    parse becomes ``NaN`` so the renderer draws a gap; ``drop_gaps=True``
    removes those rows instead.
SCATTER
    Both axes coerced; rows where either side fails are dropped, since a
    scatter point cannot have a missing coordinate.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from tabscope.charts.frequency import FrequencyEntry, value_counts
from tabscope.charts.histogram import histogram_values
from tabscope.config import DEFAULT_CONFIG
from tabscope.errors import InvalidParameterError
from tabscope.profiler.type_inference import ColumnKind, coerce_float

if TYPE_CHECKING:
    from tabscope.config import ProfilerConfig
    from tabscope.dataset import Dataset

__all__ = [
    "ChartMode",
    "Point",
    "ChartSeries",
    "bar_series",
    "line_points",
    "scatter_points",
    "build_chart",
]

logger = logging.getLogger(__name__)


class ChartMode(Enum):
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"

    @classmethod
    def parse(cls, value: ChartMode | str) -> ChartMode:
        """Accept an enum member or its (case-insensitive) value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            options = ", ".join(m.value for m in cls)
            raise InvalidParameterError(
                f"Unknown chart mode {value!r}. Options: {options}"
            ) from None


@dataclass(frozen=True)
class Point:
    x: Any
    y: float

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class ChartSeries:
    """Render-ready data for one chart.

    ``bars`` is filled in BAR mode, ``points`` in LINE and SCATTER mode.
    """

    mode: ChartMode
    x_column: str
    y_column: str = ""
    bars: tuple[FrequencyEntry, ...] = field(default_factory=tuple)
    points: tuple[Point, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.bars) if self.mode is ChartMode.BAR else len(self.points)

    def to_dict(self) -> dict[str, Any]:
        if self.mode is ChartMode.BAR:
            data = [b.to_dict() for b in self.bars]
        else:
            data = [p.to_dict() for p in self.points]
        return {
            "mode": self.mode.value,
            "x": self.x_column,
            "y": self.y_column,
            "data": data,
        }


# ---------------------------------------------------------------------------
# Per-mode builders
# ---------------------------------------------------------------------------

def bar_series(
    dataset: Dataset,
    x: str,
    kind: ColumnKind,
    config: ProfilerConfig = DEFAULT_CONFIG,
) -> list[FrequencyEntry]:
    """Bars for the BAR mode; see the module docstring."""
    values = dataset.column(x)
    if kind is ColumnKind.CATEGORICAL:
        return value_counts(values, config.null_label, missing_tokens=config.missing_tokens)
    bins = histogram_values(values, config.bar_chart_bins, precision=config.label_precision)
    return [FrequencyEntry(b.range_label, b.count) for b in bins]


def line_points(dataset: Dataset, x: str, y: str, *, drop_gaps: bool = False) -> list[Point]:
    """One point per row with the raw x and a coerced (or NaN) y."""
    xs = dataset.column(x)
    ys = dataset.column(y)
    points: list[Point] = []
    for xv, yv in zip(xs, ys):
        f = coerce_float(yv)
        if f is None:
            if drop_gaps:
                continue
            f = math.nan
        points.append(Point(xv, f))
    return points


def scatter_points(dataset: Dataset, x: str, y: str) -> list[Point]:
    """Points for rows where both coordinates parse."""
    points: list[Point] = []
    for xv, yv in zip(dataset.column(x), dataset.column(y)):
        fx = coerce_float(xv)
        fy = coerce_float(yv)
        if fx is None or fy is None:
            continue
        points.append(Point(fx, fy))
    return points


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

def build_chart(
    dataset: Dataset,
    kinds: dict[str, ColumnKind],
    mode: ChartMode | str,
    x: str,
    y: str = "",
    config: ProfilerConfig = DEFAULT_CONFIG,
    *,
    drop_gaps: bool = False,
) -> ChartSeries:
    """Project *dataset* into the series for *mode*.

    An empty *x* (nothing selected yet) or, for LINE/SCATTER, an empty *y*
    gives an empty series.  Selected columns must exist in the schema.
    """
    mode = ChartMode.parse(mode)
    for col in (x, y):
        if col:
            dataset.require_column(col)

    if not x or len(dataset) == 0:
        return ChartSeries(mode=mode, x_column=x, y_column=y)

    if mode is ChartMode.BAR:
        kind = kinds.get(x, ColumnKind.CATEGORICAL)
        bars = bar_series(dataset, x, kind, config)
        logger.debug("Bar chart of %r (%s): %d bars", x, kind.value, len(bars))
        return ChartSeries(mode=mode, x_column=x, y_column=y, bars=tuple(bars))

    if not y:
        return ChartSeries(mode=mode, x_column=x, y_column=y)

    if mode is ChartMode.LINE:
        points = line_points(dataset, x, y, drop_gaps=drop_gaps)
    else:
        points = scatter_points(dataset, x, y)
    logger.debug("%s chart of %r vs %r: %d points", mode.value, x, y, len(points))
    return ChartSeries(mode=mode, x_column=x, y_column=y, points=tuple(points))
