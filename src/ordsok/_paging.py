"""Minimum-total filtering and fixed-size pages."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._types import TableRow


def filter_rows(rows: Sequence[TableRow], threshold: float) -> list[TableRow]:
    """Drop rows whose total is below ``threshold``; ``threshold <= 0`` keeps all."""
    if threshold <= 0:
        return list(rows)
    return [row for row in rows if row.total >= threshold]


def page_count(row_count: int, page_size: int) -> int:
    """Number of pages, at least 1. ``page_size <= 0`` means a single page."""
    if page_size <= 0 or row_count <= 0:
        return 1
    return math.ceil(row_count / page_size)


def paginate(
    rows: Sequence[TableRow], page_size: int, page_index: int = 0
) -> list[TableRow]:
    """Slice out one page.

    ``page_size <= 0`` returns every row. Negative indices are treated as the
    first page; an index past the last page gives an empty page.
    """
    if page_size <= 0:
        return list(rows)
    start = max(0, page_index) * page_size
    return list(rows[start:start + page_size])
