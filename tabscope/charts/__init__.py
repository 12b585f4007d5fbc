"""Chart-ready projections: histograms, frequency tables and x/y series."""

from tabscope.charts.frequency import FrequencyEntry, top_k, value_counts
from tabscope.charts.histogram import Bin, histogram, histogram_values
from tabscope.charts.projection import ChartMode, ChartSeries, Point, build_chart

__all__ = [
    "Bin",
    "ChartMode",
    "ChartSeries",
    "FrequencyEntry",
    "Point",
    "build_chart",
    "histogram",
    "histogram_values",
    "top_k",
    "value_counts",
]
