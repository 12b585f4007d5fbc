"""
Schema-validated in-memory table.

A :class:`Dataset` is what every tabscope component consumes: an ordered
column tuple fixed at load time and an ordered tuple of rows, each row a
tuple aligned to the columns.  Records whose keys deviate from the schema
are normalised on the way in (absent keys become ``None``, unknown keys are
dropped and logged), so nothing downstream needs to iterate keys
reflectively.

Datasets are immutable.  A new upload produces a new ``Dataset``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import polars as pl

from tabscope.errors import DatasetReadError, UnknownColumnError

__all__ = ["Dataset", "read_csv", "write_csv"]

logger = logging.getLogger(__name__)


def _normalise_cell(value: Any) -> Any:
    # NaN never equals itself, which would break row equality.
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


@dataclass(frozen=True)
class Dataset:
    """Ordered rows sharing one ordered column set."""

    columns: tuple[str, ...] = ()
    rows: tuple[tuple[Any, ...], ...] = ()
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {c: i for i, c in enumerate(self.columns)})
        width = len(self.columns)
        for i, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {i} has {len(row)} fields, schema has {width}"
                )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Dataset:
        return cls()

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> Dataset:
        """Build a dataset from column→value mappings.

        The first record's keys, in insertion order, define the schema.
        Non-string keys are looked up as given and named by their ``str()``.
        """
        records = list(records)
        if not records:
            return cls()

        keys = list(records[0].keys())
        columns = tuple(str(k) for k in keys)
        known = set(keys)
        rows: list[tuple[Any, ...]] = []
        dropped = 0
        for rec in records:
            extra = [k for k in rec.keys() if k not in known]
            if extra:
                dropped += 1
                logger.debug("Dropping fields %s outside the schema", extra)
            rows.append(tuple(_normalise_cell(rec.get(k)) for k in keys))

        if dropped:
            logger.warning(
                "%d of %d records carried fields outside the schema; they were dropped",
                dropped, len(records),
            )
        return cls(columns=columns, rows=tuple(rows))

    @classmethod
    def from_polars(cls, df: pl.DataFrame) -> Dataset:
        """Build a dataset from a Polars DataFrame, keeping its cell types."""
        rows = tuple(
            tuple(_normalise_cell(v) for v in row) for row in df.rows()
        )
        return cls(columns=tuple(df.columns), rows=rows)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.rows)

    def has_column(self, name: str) -> bool:
        return name in self._index

    def require_column(self, name: str) -> int:
        """Position of *name* in the schema; raises for unknown names."""
        try:
            return self._index[name]
        except KeyError:
            raise UnknownColumnError(name, self.columns) from None

    def column(self, name: str) -> list[Any]:
        """All values of one column, in row order."""
        i = self.require_column(name)
        return [row[i] for row in self.rows]

    def records(self) -> Iterator[dict[str, Any]]:
        """Yield each row as a ``{column: value}`` dict."""
        for row in self.rows:
            yield dict(zip(self.columns, row))

    def preview(self, limit: int = 1_000) -> list[dict[str, Any]]:
        """The first *limit* rows as dicts (the dashboard's table view)."""
        return [dict(zip(self.columns, row)) for row in self.rows[:limit]]

    def to_polars(self) -> pl.DataFrame:
        """All-string Polars view, for export or ad-hoc analysis."""
        data = {
            col: [None if v is None else str(v) for v in self.column(col)]
            for col in self.columns
        }
        return pl.DataFrame(data, schema={c: pl.Utf8 for c in self.columns})


# ---------------------------------------------------------------------------
# CSV ingestion
# ---------------------------------------------------------------------------

def read_csv(
    path: str | Path,
    *,
    separator: str = ",",
    encoding: str = "utf8-lossy",
) -> Dataset:
    """Read a headed CSV file into a :class:`Dataset`.

    Every column is read as text so the profiler, not the CSV reader,
    decides what is numeric.  Malformed content is absorbed rather than
    raised: fields beyond the header are truncated, undecodable bytes are
    replaced (``utf8-lossy``), and a file with no content besides blank
    lines gives an empty dataset.  A header-only file gives a dataset with
    columns but no rows.

    Raises :class:`~tabscope.errors.DatasetReadError` only when polars
    cannot make sense of the file at all.
    """
    path = Path(path)
    if path.stat().st_size == 0:
        logger.warning("Empty CSV file: %s", path)
        return Dataset.empty()

    logger.info("Reading CSV: %s", path)
    try:
        df = pl.read_csv(
            path,
            separator=separator,
            encoding=encoding,
            infer_schema_length=0,
            truncate_ragged_lines=True,
            ignore_errors=True,
        )
    except pl.exceptions.NoDataError:
        logger.warning("No data in CSV file: %s", path)
        return Dataset.empty()
    except pl.exceptions.PolarsError as exc:
        raise DatasetReadError(f"Could not read {path.name}: {exc}") from exc

    dataset = Dataset.from_polars(df)
    logger.info("Loaded %d rows × %d columns from %s", len(dataset), len(dataset.columns), path.name)
    return dataset


def write_csv(dataset: Dataset, path: str | Path, *, separator: str = ",") -> Path:
    """Write *dataset* back out as a headed CSV file (the dashboard's export).

    Cells are written as text; ``None`` becomes an empty field.
    """
    path = Path(path)
    dataset.to_polars().write_csv(path, separator=separator)
    logger.info("Wrote %d rows to %s", len(dataset), path)
    return path
