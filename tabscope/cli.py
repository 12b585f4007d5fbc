"""
tabscope CLI — profile a CSV file from the terminal.

Commands
--------
- ``profile`` — column types, summaries, null counts and duplicates.
- ``histogram`` — equal-width bins of one numeric column.
- ``top`` — most frequent values of one column.
- ``chart`` — the render-ready series for a chart mode, as JSON.
- ``export`` — the loaded table written back out as clean CSV.

Usage::

    tabscope profile sales.csv
    tabscope histogram sales.csv --column amount --bins sqrt
    tabscope top sales.csv --column region -k 5
    tabscope chart sales.csv --mode scatter --x price --y quantity
    tabscope export sales.csv --output clean.csv
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from tabscope.charts.histogram import SQRT_RULE
from tabscope.charts.projection import ChartMode
from tabscope.dataset import read_csv, write_csv
from tabscope.errors import TabscopeError
from tabscope.profiler.summary import NumericSummary
from tabscope.session import AnalysisSession

console = Console()


def _load(path: Path, separator: str) -> AnalysisSession:
    try:
        dataset = read_csv(path, separator=separator)
    except (TabscopeError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc
    return AnalysisSession.from_dataset(dataset)


def _parse_bins(value: str) -> int | str:
    if value == SQRT_RULE:
        return value
    try:
        return int(value)
    except ValueError:
        raise click.BadParameter(f"expected a positive integer or {SQRT_RULE!r}") from None


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _nan_to_none(obj):
    if isinstance(obj, float) and math.isnan(obj):
        return None
    if isinstance(obj, dict):
        return {k: _nan_to_none(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_nan_to_none(v) for v in obj]
    return obj


# ── Shared options ───────────────────────────────────────────────────

csv_argument = click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
separator_option = click.option("--separator", default=",", show_default=True, help="CSV field delimiter.")


@click.group()
@click.version_option(package_name="tabscope")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
def main(verbose: bool) -> None:
    """tabscope — profile tabular data."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )


# ── profile ──────────────────────────────────────────────────────────

@main.command("profile")
@csv_argument
@separator_option
@click.option("--json", "as_json", is_flag=True, help="Emit the profile as JSON.")
def profile(csv_path: Path, separator: str, as_json: bool) -> None:
    """Summarise every column of a CSV file."""
    session = _load(csv_path, separator)
    prof = session.profile

    if as_json:
        click.echo(json.dumps(prof.to_dict(), indent=2))
        return

    if prof.row_count == 0:
        console.print(f"[yellow]No data rows in {csv_path.name}[/]")
        return

    table = Table(title=f"{csv_path.name}: {prof.row_count} rows")
    table.add_column("Column")
    table.add_column("Type")
    table.add_column("Count", justify="right")
    table.add_column("Nulls", justify="right")
    table.add_column("Summary")

    for col in prof.columns:
        summary = prof.summaries[col]
        if isinstance(summary, NumericSummary):
            detail = (
                f"min {_fmt(summary.min)} · q25 {_fmt(summary.q25)} · median {_fmt(summary.median)} · "
                f"q75 {_fmt(summary.q75)} · max {_fmt(summary.max)} · mean {_fmt(summary.mean)}"
            )
        else:
            top = ", ".join(f"{value}: {freq}" for value, freq in summary.top_entries)
            detail = f"{summary.distinct_count} distinct · {top}"
        table.add_row(
            col,
            prof.kinds[col].value,
            str(summary.count),
            str(prof.null_counts[col]),
            detail,
        )

    console.print(table)
    console.print(f"[dim]{prof.duplicate_count} duplicate row(s)[/]")


# ── histogram ────────────────────────────────────────────────────────

@main.command("histogram")
@csv_argument
@separator_option
@click.option("--column", required=True, help="Column to bin.")
@click.option("--bins", default="10", show_default=True, help=f"Bin count, or '{SQRT_RULE}' for ceil(sqrt(n)).")
def histogram_cmd(csv_path: Path, separator: str, column: str, bins: str) -> None:
    """Equal-width histogram of one column."""
    session = _load(csv_path, separator)
    try:
        result = session.with_selection(bin_count=_parse_bins(bins)).histogram(column)
    except TabscopeError as exc:
        raise click.ClickException(str(exc)) from exc

    if not result:
        console.print(f"[yellow]No numeric values in {column!r}[/]")
        return

    table = Table(title=f"Histogram of {column}")
    table.add_column("Range")
    table.add_column("Count", justify="right")
    for b in result:
        table.add_row(b.range_label, str(b.count))
    console.print(table)


# ── top ──────────────────────────────────────────────────────────────

@main.command("top")
@csv_argument
@separator_option
@click.option("--column", required=True, help="Column to rank.")
@click.option("-k", "k", default=15, show_default=True, help="Number of entries.")
def top(csv_path: Path, separator: str, column: str, k: int) -> None:
    """Most frequent values of one column (missing values included)."""
    session = _load(csv_path, separator)
    try:
        entries = session.with_selection(top_k=k).top_values(column)
    except TabscopeError as exc:
        raise click.ClickException(str(exc)) from exc

    table = Table(title=f"Top {k} values of {column}")
    table.add_column("#", style="dim")
    table.add_column("Value")
    table.add_column("Count", justify="right")
    for i, entry in enumerate(entries, 1):
        table.add_row(str(i), entry.label, str(entry.count))
    console.print(table)


# ── chart ────────────────────────────────────────────────────────────

@main.command("chart")
@csv_argument
@separator_option
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ChartMode], case_sensitive=False),
    default=ChartMode.BAR.value,
    show_default=True,
)
@click.option("--x", "x", default=None, help="X column (default: first column).")
@click.option("--y", "y", default=None, help="Y column (default: first numeric column).")
@click.option("--drop-gaps", is_flag=True, help="Line mode: drop rows whose y does not parse.")
def chart(csv_path: Path, separator: str, mode: str, x: str | None, y: str | None, drop_gaps: bool) -> None:
    """Print the series a chart mode would render, as JSON."""
    session = _load(csv_path, separator)
    selection: dict = {"mode": mode, "drop_gaps": drop_gaps}
    if x is not None:
        selection["x"] = x
    if y is not None:
        selection["y"] = y
    try:
        series = session.with_selection(**selection).chart
    except TabscopeError as exc:
        raise click.ClickException(str(exc)) from exc

    # NaN gaps become JSON nulls.
    click.echo(json.dumps(_nan_to_none(series.to_dict()), indent=2))


# ── export ───────────────────────────────────────────────────────────

@main.command("export")
@csv_argument
@separator_option
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False, path_type=Path), help="Destination CSV file.")
def export(csv_path: Path, separator: str, output: Path) -> None:
    """Write the loaded table back out as a comma-separated CSV file."""
    session = _load(csv_path, separator)
    try:
        write_csv(session.dataset, output)
    except OSError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"Wrote {len(session.dataset)} rows to {output}")


if __name__ == "__main__":
    main()
