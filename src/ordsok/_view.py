"""Table derivation: build, sort, filter and page in one pure call."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping

from ._paging import filter_rows, page_count, paginate
from ._sort import sort_rows
from ._table import build_document_rows, build_year_pivot, document_columns, topic_universe
from ._types import CorpusSummary, DocumentMeta, Table, ViewOptions
from ._years import parse_year


def derive_table(
    result: Mapping[str, Mapping[str, float]] | None,
    meta: Mapping[str, DocumentMeta] | None = None,
    options: ViewOptions | None = None,
) -> Table:
    """Derive the renderable table for ``result`` under ``options``.

    Everything is recomputed from the inputs; nothing is cached between
    calls. The pivoted table is never paged.
    """
    result = result or {}
    meta = meta if meta is not None else {}
    options = options or ViewOptions()

    if options.pivot_by_year:
        rows, columns, year_totals, dropped = build_year_pivot(
            result, meta, options.year_bin_size, options.show_percent,
        )
    else:
        columns = document_columns(topic_universe(result))
        rows = build_document_rows(result, [c.key for c in columns])
        year_totals, dropped = None, 0

    rows = sort_rows(
        rows, options.sort_key, options.sort_dir,
        columns=columns,
        metadata=meta,
        year_totals=year_totals,
        pivot_by_year=options.pivot_by_year,
    )
    rows = filter_rows(rows, options.total_threshold)
    total_row_count = len(rows)

    if options.pivot_by_year:
        page_index, pages = 0, 1
    else:
        page_index = max(0, options.page_index)
        pages = page_count(total_row_count, options.page_size)
        rows = paginate(rows, options.page_size, page_index)

    return Table(
        rows=rows,
        columns=columns,
        total_row_count=total_row_count,
        year_totals=year_totals,
        pivot_by_year=options.pivot_by_year,
        show_percent=options.show_percent,
        page_index=page_index,
        page_count=pages,
        dropped_documents=dropped,
        metadata=meta,
    )


def summarize(
    result: Mapping[str, Mapping[str, float]] | None,
    meta: Mapping[str, DocumentMeta] | None = None,
) -> CorpusSummary:
    """Corpus-level statistics for an evaluation result."""
    result = result or {}
    meta = meta if meta is not None else {}

    topic_totals: Counter[str] = Counter()
    years: list[int] = []
    without_year = 0
    for doc_id, counts in result.items():
        for topic, count in (counts or {}).items():
            topic_totals[topic] += count or 0
        y = parse_year(getattr(meta.get(doc_id), "year", None))
        if y is None:
            without_year += 1
        else:
            years.append(y)

    return CorpusSummary(
        document_count=len(result),
        topic_count=len(topic_totals),
        grand_total=sum(topic_totals.values()),
        topic_totals={t: topic_totals[t] for t in sorted(topic_totals)},
        documents_without_year=without_year,
        first_year=min(years) if years else None,
        last_year=max(years) if years else None,
    )
