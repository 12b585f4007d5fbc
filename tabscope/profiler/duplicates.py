"""
Duplicate-row detection.

Rows are compared as whole tuples aligned to the dataset schema, so two
records that listed the same fields in a different key order are still
equal.  Comparison is on the stored field values themselves, never on a
re-serialised text form.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tabscope.dataset import Dataset

__all__ = ["count_duplicates", "duplicate_row_indices"]

logger = logging.getLogger(__name__)


def count_duplicates(dataset: Dataset) -> int:
    """Number of rows that repeat an earlier row.

    A group of ``m`` identical rows contributes ``m - 1``.
    """
    groups = Counter(dataset.rows)
    total = sum(m - 1 for m in groups.values())
    logger.debug("%d duplicate rows across %d distinct rows", total, len(groups))
    return total


def duplicate_row_indices(dataset: Dataset) -> list[int]:
    """Positions of every row that repeats an earlier row, ascending."""
    seen: set[tuple] = set()
    dupes: list[int] = []
    for i, row in enumerate(dataset.rows):
        if row in seen:
            dupes.append(i)
        else:
            seen.add(row)
    return dupes
