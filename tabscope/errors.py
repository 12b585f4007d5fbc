"""
Exceptions raised for caller mistakes.

Malformed *data* never raises anywhere in tabscope; these cover bad
*parameters* (a column that is not in the schema, a non-positive bin
count, an unknown chart mode) and files polars cannot read as CSV at all.
"""

from __future__ import annotations

__all__ = ["TabscopeError", "UnknownColumnError", "InvalidParameterError", "DatasetReadError"]


class TabscopeError(Exception):
    """Base class for all tabscope errors."""


class UnknownColumnError(TabscopeError, KeyError):
    """A column name that is not part of the dataset schema."""

    def __init__(self, column: str, columns: tuple[str, ...] = ()) -> None:
        self.column = column
        self.columns = columns
        super().__init__(column)

    def __str__(self) -> str:
        if self.columns:
            return f"Unknown column {self.column!r}. Options: {', '.join(self.columns)}"
        return f"Unknown column {self.column!r}"


class InvalidParameterError(TabscopeError, ValueError):
    """A per-call parameter outside its documented domain."""


class DatasetReadError(TabscopeError):
    """A file that could not be parsed into a dataset."""
