"""Tests for tabscope.cli."""

import json

import polars as pl
import pytest
from click.testing import CliRunner

from tabscope.cli import main


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "sales.csv"
    path.write_text(
        "region,amount,units\n"
        "north,10,1\n"
        "south,20,oops\n"
        "north,10,1\n"
        "east,40,4\n"
    )
    return path


@pytest.fixture
def runner():
    return CliRunner()


class TestProfileCommand:
    def test_table(self, runner, csv_file):
        result = runner.invoke(main, ["profile", str(csv_file)])
        assert result.exit_code == 0, result.output
        assert "region" in result.output
        assert "numeric" in result.output
        assert "1 duplicate row(s)" in result.output

    def test_json(self, runner, csv_file):
        result = runner.invoke(main, ["profile", str(csv_file), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["row_count"] == 4
        assert data["types"] == {"region": "categorical", "amount": "numeric", "units": "numeric"}
        assert data["summary"]["amount"]["median"] == 10.0

    def test_header_only(self, runner, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("a,b\n")
        result = runner.invoke(main, ["profile", str(path)])
        assert result.exit_code == 0, result.output
        assert "No data rows" in result.output

    def test_unreadable_file(self, runner, csv_file, monkeypatch):
        def broken(*args, **kwargs):
            raise pl.exceptions.ComputeError("could not parse")

        monkeypatch.setattr(pl, "read_csv", broken)
        result = runner.invoke(main, ["profile", str(csv_file)])
        assert result.exit_code != 0
        assert "Error" in result.output
        assert "could not parse" in result.output
        assert not isinstance(result.exception, pl.exceptions.PolarsError)

    def test_blank_lines_only(self, runner, tmp_path):
        path = tmp_path / "blank.csv"
        path.write_text("\n\n")
        result = runner.invoke(main, ["profile", str(path)])
        assert result.exit_code == 0, result.output
        assert "No data rows" in result.output


class TestHistogramCommand:
    def test_bins(self, runner, csv_file):
        result = runner.invoke(main, ["histogram", str(csv_file), "--column", "amount", "--bins", "3"])
        assert result.exit_code == 0, result.output
        assert "[10.00, 20.00)" in result.output

    def test_sqrt(self, runner, csv_file):
        result = runner.invoke(main, ["histogram", str(csv_file), "--column", "amount", "--bins", "sqrt"])
        assert result.exit_code == 0, result.output

    def test_bad_bins(self, runner, csv_file):
        result = runner.invoke(main, ["histogram", str(csv_file), "--column", "amount", "--bins", "0"])
        assert result.exit_code != 0
        assert "bin_count" in result.output

    def test_unknown_column(self, runner, csv_file):
        result = runner.invoke(main, ["histogram", str(csv_file), "--column", "nope"])
        assert result.exit_code != 0
        assert "Unknown column" in result.output


class TestTopCommand:
    def test_top(self, runner, csv_file):
        result = runner.invoke(main, ["top", str(csv_file), "--column", "region", "-k", "1"])
        assert result.exit_code == 0, result.output
        assert "north" in result.output
        assert "south" not in result.output


class TestChartCommand:
    def test_scatter(self, runner, csv_file):
        result = runner.invoke(main, ["chart", str(csv_file), "--mode", "scatter", "--x", "amount", "--y", "units"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["mode"] == "scatter"
        assert len(data["data"]) == 3

    def test_line_gaps_are_null(self, runner, csv_file):
        result = runner.invoke(main, ["chart", str(csv_file), "--mode", "line", "--x", "region", "--y", "units"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"][1] == {"x": "south", "y": None}

    def test_default_bar(self, runner, csv_file):
        result = runner.invoke(main, ["chart", str(csv_file)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["x"] == "region"
        assert data["data"][0] == {"key": "north", "value": 2}


class TestExportCommand:
    def test_writes_csv(self, runner, csv_file, tmp_path):
        out = tmp_path / "clean.csv"
        result = runner.invoke(main, ["export", str(csv_file), "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert "Wrote 4 rows" in result.output
        lines = out.read_text().splitlines()
        assert lines[0] == "region,amount,units"
        assert lines[2] == "south,20,oops"
