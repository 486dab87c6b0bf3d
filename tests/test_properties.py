"""Invariants of the table engine over generated corpora."""

import pytest

from ordsok import ViewOptions, derive_table


@pytest.fixture(params=[0, 1, 2])
def generated(request, corpus_factory):
    return corpus_factory(150, seed=request.param)


def test_row_total_is_sum_of_values(generated):
    result, meta = generated
    for opts in (ViewOptions(), ViewOptions(pivot_by_year=True, year_bin_size=10)):
        for row in derive_table(result, meta, opts).rows:
            assert row.total == sum(row.values.values())


def test_pivot_conserves_totals(generated):
    """With every document dated, pivoting moves counts without losing any."""
    result, meta = generated
    dated = {
        doc_id: counts for doc_id, counts in result.items()
        if meta[doc_id].year is not None
    }
    by_doc = derive_table(dated, meta, ViewOptions())
    for size in (1, 10, 25):
        pivot = derive_table(dated, meta, ViewOptions(pivot_by_year=True, year_bin_size=size))
        assert pivot.dropped_documents == 0
        assert sum(r.total for r in pivot.rows) == sum(r.total for r in by_doc.rows)


def test_idempotent(generated):
    result, meta = generated
    for opts in (
        ViewOptions(sort_key="title", sort_dir="asc", page_size=20, page_index=1),
        ViewOptions(pivot_by_year=True, show_percent=True, year_bin_size=5),
    ):
        a = derive_table(result, meta, opts)
        b = derive_table(result, meta, opts)
        assert a == b


def test_percent_columns_sum_to_hundred(generated):
    result, meta = generated
    table = derive_table(
        result, meta, ViewOptions(pivot_by_year=True, show_percent=True, year_bin_size=10),
    )
    for column in table.columns:
        if column.kind != "percent" or not table.year_totals[column.year]:
            continue
        total = sum(table.cell(row, column) for row in table.rows)
        assert total == pytest.approx(100.0)


def test_threshold_never_grows_result(generated):
    result, meta = generated
    previous = None
    for threshold in range(0, 300, 25):
        count = derive_table(result, meta, ViewOptions(total_threshold=threshold)).total_row_count
        if previous is not None:
            assert count <= previous
        previous = count
