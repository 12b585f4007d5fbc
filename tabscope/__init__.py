"""
tabscope — in-memory profiling for uploaded tabular data.

Takes a decoded row set and returns plain structures for rendering:
per-column type classification, summary statistics, null and duplicate
diagnostics, and chart-ready projections.

Quick start::

    from tabscope import AnalysisSession, read_csv
    session = AnalysisSession.from_dataset(read_csv("sales.csv"))
    session.profile.to_dict()
"""

from tabscope.config import ProfilerConfig
from tabscope.dataset import Dataset, read_csv, write_csv
from tabscope.session import AnalysisSession, DatasetProfile

__all__ = ["AnalysisSession", "Dataset", "DatasetProfile", "ProfilerConfig", "read_csv", "write_csv"]
__version__ = "0.1.0"
