"""Tests for tabscope.profiler.summary."""

import random

import numpy as np
import pytest

from tabscope.config import ProfilerConfig
from tabscope.dataset import Dataset
from tabscope.profiler.summary import (
    CategoricalSummary,
    NumericSummary,
    nearest_rank_quantile,
    summarize_categorical,
    summarize_column,
    summarize_dataset,
    summarize_numeric,
)
from tabscope.profiler.type_inference import ColumnKind


# ── numeric path ─────────────────────────────────────────────────────

class TestSummarizeNumeric:
    def test_nearest_rank_no_interpolation(self):
        s = summarize_numeric(["4", "1", "3", "2"])
        assert s.count == 4
        assert s.mean == 2.5
        assert s.min == 1.0
        assert s.max == 4.0
        # floor(3 * p) → indices 0, 1, 2
        assert s.q25 == 1.0
        assert s.median == 2.0
        assert s.q75 == 3.0

    def test_unparsable_dropped(self):
        s = summarize_numeric(["10", "abc", "", "20", "1e3"])
        assert s.count == 2
        assert s.mean == 15.0

    def test_single_value(self):
        s = summarize_numeric(["7"])
        assert (s.min, s.q25, s.median, s.q75, s.max) == (7.0, 7.0, 7.0, 7.0, 7.0)

    def test_empty_is_zeroed(self):
        assert summarize_numeric([]) == NumericSummary()
        assert summarize_numeric(["x", None]).count == 0

    def test_quantile_helper(self):
        arr = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        assert nearest_rank_quantile(arr, 0.5) == 3.0
        assert nearest_rank_quantile(arr, 0.75) == 4.0

    @pytest.mark.parametrize("seed", range(5))
    def test_order_statistics_monotone(self, seed):
        rng = random.Random(seed)
        values = [str(rng.randint(-1000, 1000)) for _ in range(rng.randint(1, 60))]
        s = summarize_numeric(values)
        assert s.min <= s.q25 <= s.median <= s.q75 <= s.max


# ── categorical path ─────────────────────────────────────────────────

class TestSummarizeCategorical:
    def test_top_entries(self):
        s = summarize_categorical(["b", "a", "b", "c", "a", "b", ""])
        assert s.count == 6
        assert s.distinct_count == 3
        assert s.top_entries == (("b", 3), ("a", 2), ("c", 1))

    def test_ties_keep_encounter_order(self):
        s = summarize_categorical(["z", "y", "x", "y", "z"])
        assert s.top_entries == (("z", 2), ("y", 2), ("x", 1))

    def test_truncated_to_five(self):
        s = summarize_categorical(list("abcdefg"))
        assert s.distinct_count == 7
        assert len(s.top_entries) == 5

    def test_tokens_excluded(self):
        s = summarize_categorical(["NA", "null", "x"])
        assert s.count == 1
        assert s.top_entries == (("x", 1),)

    def test_string_representation_merges(self):
        s = summarize_categorical([1, "1", "a"])
        assert s.distinct_count == 2
        assert s.top_entries[0] == ("1", 2)


# ── routing ──────────────────────────────────────────────────────────

class TestRouting:
    def test_sixty_percent_is_numeric(self):
        s = summarize_column(["1", "2", "3", "x", "y"])
        assert isinstance(s, NumericSummary)
        assert s.count == 3

    def test_below_sixty_percent_is_categorical(self):
        s = summarize_column(["1", "x", "y"])
        assert isinstance(s, CategoricalSummary)

    def test_missing_not_in_denominator(self):
        s = summarize_column(["1", "", "", "NA"])
        assert isinstance(s, NumericSummary)

    def test_all_missing_is_empty_categorical(self):
        s = summarize_column(["", None])
        assert s == CategoricalSummary()

    def test_forced_kind(self):
        s = summarize_column(["1", "2"], kind=ColumnKind.CATEGORICAL)
        assert isinstance(s, CategoricalSummary)
        assert s.distinct_count == 2

    def test_recheck_can_differ_from_inference(self):
        # A tie is CATEGORICAL for inference; a 0.5 ratio still routes it numeric.
        cfg = ProfilerConfig(numeric_summary_ratio=0.5)
        s = summarize_column(["1", "x"], cfg)
        assert isinstance(s, NumericSummary)


# ── dataset ──────────────────────────────────────────────────────────

class TestSummarizeDataset:
    @pytest.fixture
    def ds(self):
        return Dataset.from_records([
            {"a": "1", "b": "x"},
            {"a": "2", "b": "y"},
            {"a": "", "b": "x"},
        ])

    def test_per_column(self, ds):
        out = summarize_dataset(ds)
        assert list(out) == ["a", "b"]
        assert isinstance(out["a"], NumericSummary)
        assert out["a"].count == 2
        assert out["b"].top_entries == (("x", 2), ("y", 1))

    def test_empty_dataset(self):
        assert summarize_dataset(Dataset.empty()) == {}

    def test_header_only_dataset(self):
        assert summarize_dataset(Dataset(columns=("a", "b"))) == {}

    def test_kinds_ignored_by_default(self, ds):
        out = summarize_dataset(ds, {"a": ColumnKind.CATEGORICAL})
        assert isinstance(out["a"], NumericSummary)

    def test_route_by_kind(self, ds):
        cfg = ProfilerConfig(route_summaries_by_kind=True)
        out = summarize_dataset(ds, {"a": ColumnKind.CATEGORICAL, "b": ColumnKind.CATEGORICAL}, cfg)
        assert isinstance(out["a"], CategoricalSummary)
        assert out["a"].count == 2

    def test_to_dict(self, ds):
        out = summarize_dataset(ds)
        assert out["a"].to_dict()["type"] == "numeric"
        assert out["b"].to_dict() == {
            "type": "categorical",
            "count": 3,
            "distinct": 2,
            "top": [["x", 2], ["y", 1]],
        }
