"""Tests for tabscope.charts.frequency."""

import random

import pytest

from tabscope.charts.frequency import FrequencyEntry, top_k, value_counts
from tabscope.errors import InvalidParameterError


class TestTopK:
    def test_scenario_column(self):
        assert top_k(["x", "y", "x"], 5) == [FrequencyEntry("x", 2), FrequencyEntry("y", 1)]

    def test_missing_bucketed(self):
        out = top_k(["a", None, "", "NA", "a"], 5)
        assert out == [FrequencyEntry("(null)", 3), FrequencyEntry("a", 2)]

    def test_custom_null_label(self):
        out = top_k([None], 5, null_label="∅")
        assert out == [FrequencyEntry("∅", 1)]

    def test_ties_first_seen(self):
        out = top_k(["c", "b", "a", "b", "c", "a"], 3)
        assert [e.label for e in out] == ["c", "b", "a"]

    def test_truncates(self):
        assert len(top_k([str(i) for i in range(40)])) == 15

    def test_numbers_keyed_as_strings(self):
        out = top_k([1, "1", 2.5], 5)
        assert out[0] == FrequencyEntry("1", 2)

    @pytest.mark.parametrize("seed", range(5))
    def test_length_and_order(self, seed):
        rng = random.Random(seed)
        values = [rng.choice("abcdefgh") for _ in range(rng.randint(0, 100))]
        k = rng.randint(1, 10)
        out = top_k(values, k)
        assert len(out) <= k
        counts = [e.count for e in out]
        assert counts == sorted(counts, reverse=True)

    @pytest.mark.parametrize("bad", [0, -1, 1.5, True])
    def test_invalid_k(self, bad):
        with pytest.raises(InvalidParameterError):
            top_k(["a"], bad)


class TestValueCounts:
    def test_first_seen_order(self):
        out = value_counts(["b", "a", "b", None])
        assert out == [FrequencyEntry("b", 2), FrequencyEntry("a", 1), FrequencyEntry("(null)", 1)]

    def test_empty(self):
        assert value_counts([]) == []

    def test_to_dict(self):
        assert FrequencyEntry("a", 2).to_dict() == {"key": "a", "value": 2}
