"""Tests for row ordering and sort-key toggling."""

import dataclasses

import pytest

from ordsok import DocumentMeta, ViewOptions, default_sort_dir, derive_table, sort_rows
from ordsok._table import build_document_rows


@pytest.fixture
def library():
    result = {
        "1": {"a": 1},
        "2": {"a": 4},
        "3": {"a": 4},
        "4": {"a": 2},
        "5": {"a": 0},
    }
    meta = {
        "1": DocumentMeta(title="Åsgardsreien", authors="Welhaven", year="1850"),
        "2": DocumentMeta(title="Zebra", authors="Øverland", year="1931"),
        "3": DocumentMeta(title="Ærlig talt", authors=None, year=None),
        "4": DocumentMeta(title="Apal", authors="Bjørnson", year="1900"),
        "5": DocumentMeta(title="Øl og vin", authors="Aasen", year="abc"),
    }
    return result, meta


def _ids(result, meta, key, direction):
    table = derive_table(result, meta, ViewOptions(sort_key=key, sort_dir=direction))
    return [r.id for r in table.rows]


def test_default_directions():
    assert default_sort_dir("title") == "asc"
    assert default_sort_dir("authors") == "asc"
    assert default_sort_dir("dhlabid") == "asc"
    assert default_sort_dir("row") == "asc"
    assert default_sort_dir("total") == "desc"
    assert default_sort_dir("year") == "desc"
    assert default_sort_dir("nature") == "desc"


def test_toggle_same_key_flips():
    opts = ViewOptions(sort_key="total", sort_dir="desc")
    assert opts.toggle_sort("total").sort_dir == "asc"
    assert opts.toggle_sort("total").toggle_sort("total").sort_dir == "desc"


def test_toggle_new_key_resets():
    opts = ViewOptions(sort_key="total", sort_dir="asc")
    title = opts.toggle_sort("title")
    assert (title.sort_key, title.sort_dir) == ("title", "asc")
    back = title.toggle_sort("total")
    assert (back.sort_key, back.sort_dir) == ("total", "desc")


def test_toggle_leaves_original_untouched():
    opts = ViewOptions()
    opts.toggle_sort("title")
    assert opts.sort_key == "total"


def test_title_norwegian_order(library):
    """Æ, Ø and Å sort after Z."""
    result, meta = library
    assert _ids(result, meta, "title", "asc") == ["4", "2", "3", "5", "1"]


def test_authors_missing_sorts_as_empty(library):
    """Missing authors compare as the empty string; "Aa" sorts as Å."""
    result, meta = library
    assert _ids(result, meta, "authors", "asc") == ["3", "4", "1", "2", "5"]


def test_total_ties_broken_by_id(library):
    result, meta = library
    assert _ids(result, meta, "total", "desc") == ["3", "2", "4", "1", "5"]
    assert _ids(result, meta, "total", "asc") == ["5", "1", "4", "2", "3"]


def test_year_missing_sorts_lowest(library):
    """Missing and non-numeric years sit below every real year."""
    result, meta = library
    assert _ids(result, meta, "year", "desc") == ["2", "4", "1", "5", "3"]
    assert _ids(result, meta, "year", "asc") == ["3", "5", "1", "4", "2"]


def test_dhlabid_sort(library):
    result, meta = library
    assert _ids(result, meta, "dhlabid", "asc") == ["1", "2", "3", "4", "5"]


def test_topic_column_sort(library):
    result, meta = library
    assert _ids(result, meta, "a", "desc") == ["3", "2", "4", "1", "5"]


def test_unknown_key_keeps_order(library):
    result, meta = library
    rows = build_document_rows(result)
    assert [r.id for r in sort_rows(rows, "no-such-column", "desc")] == ["1", "2", "3", "4", "5"]
    assert [r.id for r in sort_rows(rows, "no-such-column", "asc")] == ["1", "2", "3", "4", "5"]


def test_row_key_only_in_pivot(library):
    """"row" is the identity key of the pivoted table only."""
    result, meta = library
    rows = build_document_rows(result)
    assert [r.id for r in sort_rows(rows, "row", "desc")] == ["1", "2", "3", "4", "5"]


def test_descending_is_reverse_of_ascending(corpus_small):
    result, meta = corpus_small
    for key in ("total", "title", "authors", "year", "dhlabid", "natur", "kjærlighet"):
        asc = _ids(result, meta, key, "asc")
        desc = _ids(result, meta, key, "desc")
        assert list(reversed(asc)) == desc, key


@pytest.fixture
def pivot_input():
    result = {
        "d1": {"skog": 10, "hav": 90},
        "d2": {"skog": 3, "hav": 1},
        "d3": {"by": 5},
    }
    meta = {
        "d1": DocumentMeta(year="2000"),
        "d2": DocumentMeta(year="2001"),
        "d3": DocumentMeta(year="2001"),
    }
    return result, meta


def _pivot_ids(result, meta, key, direction):
    opts = ViewOptions(pivot_by_year=True, show_percent=True, sort_key=key, sort_dir=direction)
    return [r.id for r in derive_table(result, meta, opts).rows]


def test_pivot_sort_by_count_column(pivot_input):
    result, meta = pivot_input
    assert _pivot_ids(result, meta, "2000__count", "desc") == ["hav", "skog", "by"]


def test_pivot_sort_by_percent_column(pivot_input):
    result, meta = pivot_input
    assert _pivot_ids(result, meta, "2001__percent", "desc") == ["by", "skog", "hav"]


def test_pivot_sort_by_bare_year(pivot_input):
    result, meta = pivot_input
    assert _pivot_ids(result, meta, "2001", "desc") == ["by", "skog", "hav"]


def test_pivot_sort_by_row(pivot_input):
    result, meta = pivot_input
    assert _pivot_ids(result, meta, "row", "asc") == ["by", "hav", "skog"]


def test_pivot_ignores_document_keys(pivot_input):
    """title/year address documents, which the pivoted table does not have."""
    result, meta = pivot_input
    default = _pivot_ids(result, meta, "unknown", "desc")
    assert _pivot_ids(result, meta, "title", "asc") == default
    assert _pivot_ids(result, meta, "year", "desc") == default


def test_pivot_percent_key_without_percent_columns():
    """A percent key sorts by share of the bin even when percent columns are off."""
    result = {"d1": {"a": 1, "b": 3, "c": 2}}
    meta = {"d1": DocumentMeta(year="1901")}
    opts = ViewOptions(pivot_by_year=True, sort_key="1901__percent", sort_dir="asc")
    table = derive_table(result, meta, opts)
    assert not any(c.kind == "percent" for c in table.columns)
    assert [r.id for r in table.rows] == ["a", "c", "b"]


def test_pivot_count_key_for_unknown_bin_keeps_order(pivot_input):
    result, meta = pivot_input
    default = _pivot_ids(result, meta, "unknown", "desc")
    assert _pivot_ids(result, meta, "1999__count", "desc") == default


@pytest.mark.parametrize("show_percent", [False, True])
def test_pivot_descending_is_reverse_of_ascending(corpus_small, show_percent):
    result, meta = corpus_small
    base = ViewOptions(pivot_by_year=True, year_bin_size=10, show_percent=show_percent)
    bins = sorted(derive_table(result, meta, base).year_totals)[:3]
    keys = ["row", "total"]
    for label in bins:
        keys += [label, f"{label}__count", f"{label}__percent"]
    for key in keys:
        asc = [r.id for r in derive_table(result, meta, _with_sort(base, key, "asc")).rows]
        desc = [r.id for r in derive_table(result, meta, _with_sort(base, key, "desc")).rows]
        assert list(reversed(asc)) == desc, key


def _with_sort(options, key, direction):
    return dataclasses.replace(options, sort_key=key, sort_dir=direction)
