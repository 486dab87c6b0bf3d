"""Row/column builders: by-document table and by-word-group year pivot."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import TYPE_CHECKING

from ._types import COUNT, PERCENT, ColumnDef, TableRow
from ._years import UNKNOWN_YEAR_BIN, bin_start, coerce_bin_size, year_bin

if TYPE_CHECKING:
    from ._types import DocumentMeta


def topic_universe(result: Mapping[str, Mapping[str, float]]) -> list[str]:
    """Union of word-group names across all documents, sorted."""
    topics: set[str] = set()
    for counts in result.values():
        topics.update(counts or {})
    return sorted(topics)


def document_columns(topics: list[str]) -> list[ColumnDef]:
    return [ColumnDef(key=t, label=t, kind=COUNT) for t in topics]


def build_document_rows(
    result: Mapping[str, Mapping[str, float]],
    topics: list[str] | None = None,
) -> list[TableRow]:
    """One row per document, one value per topic (missing topics count 0)."""
    if topics is None:
        topics = topic_universe(result)
    rows: list[TableRow] = []
    for doc_id, counts in result.items():
        counts = counts or {}
        values = {t: counts.get(t) or 0 for t in topics}
        rows.append(TableRow.build(doc_id, values))
    return rows


def year_columns(bins: list[str], show_percent: bool) -> list[ColumnDef]:
    """Count column per bin, each followed by a percent column if requested."""
    columns: list[ColumnDef] = []
    for label in bins:
        columns.append(ColumnDef(
            key=f"{label}__count", label=label, kind=COUNT, year=label,
        ))
        if show_percent:
            columns.append(ColumnDef(
                key=f"{label}__percent", label=f"{label} %",
                kind=PERCENT, year=label,
            ))
    return columns


def build_year_pivot(
    result: Mapping[str, Mapping[str, float]],
    meta: Mapping[str, DocumentMeta],
    year_bin_size: object = 1,
    show_percent: bool = False,
) -> tuple[list[TableRow], list[ColumnDef], dict[str, float], int]:
    """Pivot to one row per word-group with one column per year bin.

    Documents without a usable year are left out and counted.

    Returns:
        (rows, columns, year_totals, dropped_documents). Rows follow the
        topic universe order; bins are in chronological order.
    """
    size = coerce_bin_size(year_bin_size)
    topics = topic_universe(result)

    cells: dict[str, dict[str, float]] = {t: defaultdict(int) for t in topics}
    year_totals: dict[str, float] = defaultdict(int)
    dropped = 0

    for doc_id, counts in result.items():
        doc_meta = meta.get(doc_id)
        label = year_bin(getattr(doc_meta, "year", None), size)
        if label == UNKNOWN_YEAR_BIN:
            dropped += 1
            continue
        year_totals[label] += 0
        for topic, count in (counts or {}).items():
            count = count or 0
            cells[topic][label] += count
            year_totals[label] += count

    bins = sorted(year_totals, key=bin_start)

    rows = [
        TableRow.build(t, {b: cells[t].get(b, 0) for b in bins})
        for t in topics
    ]
    return rows, year_columns(bins, show_percent), dict(year_totals), dropped
