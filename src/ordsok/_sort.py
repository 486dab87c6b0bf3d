"""Row ordering for both table modes."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ._collation import norwegian_sort_key
from ._table import document_columns
from ._types import ASC, COUNT, DESC, PERCENT
from ._years import MISSING_YEAR, parse_year, percent

if TYPE_CHECKING:
    from ._types import ColumnDef, DocumentMeta, TableRow

DOCUMENT_ID_KEY = "dhlabid"
PIVOT_ID_KEY = "row"
TOTAL_KEY = "total"
YEAR_KEY = "year"

LEXICAL_KEYS = frozenset({"title", "authors", DOCUMENT_ID_KEY, PIVOT_ID_KEY})


def default_sort_dir(key: str) -> str:
    """Ascending for text keys, descending for everything numeric."""
    return ASC if key in LEXICAL_KEYS else DESC


def _primary_key(
    sort_key: str,
    *,
    columns: Sequence[ColumnDef],
    metadata: Mapping[str, DocumentMeta],
    year_totals: Mapping[str, float],
    pivot_by_year: bool,
) -> Callable[[TableRow], Any] | None:
    """Value extractor for ``sort_key``, None if the key is not sortable."""
    id_key = PIVOT_ID_KEY if pivot_by_year else DOCUMENT_ID_KEY
    if sort_key == id_key:
        return lambda row: norwegian_sort_key(row.id)

    if sort_key == TOTAL_KEY:
        return lambda row: row.total

    if not pivot_by_year:
        if sort_key in ("title", "authors"):
            def text_of(row: TableRow) -> Any:
                meta = metadata.get(row.id)
                return norwegian_sort_key(getattr(meta, sort_key, None) or "")
            return text_of

        if sort_key == YEAR_KEY:
            def year_of(row: TableRow) -> float:
                meta = metadata.get(row.id)
                y = parse_year(getattr(meta, "year", None))
                return MISSING_YEAR if y is None else y
            return year_of

    for column in columns:
        if column.key != sort_key:
            continue
        if column.year is None:
            return lambda row: row.values.get(sort_key, 0)
        year = column.year
        if column.kind == PERCENT:
            denominator = year_totals.get(year, 0)
            return lambda row: percent(row.values.get(year, 0), denominator)
        return lambda row: row.values.get(year, 0)

    if pivot_by_year:
        # "<bin>__count" / "<bin>__percent" stay sortable when the column is hidden
        label, _, kind = sort_key.rpartition("__")
        if label in year_totals and kind == PERCENT:
            denominator = year_totals[label]
            return lambda row: percent(row.values.get(label, 0), denominator)
        if label in year_totals and kind == COUNT:
            return lambda row: row.values.get(label, 0)
        if sort_key in year_totals:
            return lambda row: row.values.get(sort_key, 0)

    return None


def sort_rows(
    rows: Sequence[TableRow],
    sort_key: str,
    sort_dir: str = DESC,
    *,
    columns: Sequence[ColumnDef] = (),
    metadata: Mapping[str, DocumentMeta] | None = None,
    year_totals: Mapping[str, float] | None = None,
    pivot_by_year: bool = False,
) -> list[TableRow]:
    """Return ``rows`` ordered by ``sort_key``.

    Equal primary values are ordered by row id in the same direction, so
    descending is always the exact reverse of ascending. An unknown key
    leaves the order unchanged.
    """
    if not columns and rows and not pivot_by_year:
        columns = document_columns(list(rows[0].values))
    primary = _primary_key(
        sort_key,
        columns=columns,
        metadata=metadata or {},
        year_totals=year_totals or {},
        pivot_by_year=pivot_by_year,
    )
    if primary is None:
        return list(rows)

    def key(row: TableRow) -> tuple:
        return primary(row), norwegian_sort_key(row.id), row.id

    return sorted(rows, key=key, reverse=sort_dir == DESC)
