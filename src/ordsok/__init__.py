"""Ordsøk: count grouped words in DH-lab corpora and tabulate the results."""

from __future__ import annotations

from ._chart import MAX_SERIES, derive_chart
from ._collation import compare_norwegian, norwegian_sort_key
from ._counter import WordbagCounter
from ._errors import DhlabClientError, OrdsokError, OrdsokParseError
from ._paging import filter_rows, page_count, paginate
from ._parsing import (
    MAX_CORPUS,
    normalize_authors,
    normalize_evaluation,
    parse_build_query,
    parse_corpus_response,
    parse_word_list,
    wordbags_from_obj,
    wordbags_payload,
)
from ._sort import default_sort_dir, sort_rows
from ._table import build_document_rows, build_year_pivot, topic_universe
from ._types import (
    ASC,
    COUNT,
    DESC,
    PERCENT,
    ChartSeries,
    ColumnDef,
    Corpus,
    CorpusSummary,
    DocumentMeta,
    EvaluationResult,
    MetadataIndex,
    Series,
    Table,
    TableRow,
    ViewOptions,
    Wordbag,
)
from ._view import derive_table, summarize
from ._years import UNKNOWN_YEAR_BIN, coerce_bin_size, parse_year, percent, year_bin

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ASC",
    "COUNT",
    "DESC",
    "MAX_CORPUS",
    "MAX_SERIES",
    "PERCENT",
    "UNKNOWN_YEAR_BIN",
    "ChartSeries",
    "ColumnDef",
    "Corpus",
    "CorpusSummary",
    "DhlabClient",
    "DhlabClientError",
    "DocumentMeta",
    "EvaluationResult",
    "MetadataIndex",
    "OrdsokError",
    "OrdsokParseError",
    "Series",
    "Table",
    "TableRow",
    "ViewOptions",
    "Wordbag",
    "WordbagCounter",
    "build_document_rows",
    "build_year_pivot",
    "coerce_bin_size",
    "compare_norwegian",
    "default_sort_dir",
    "derive_chart",
    "derive_table",
    "filter_rows",
    "normalize_authors",
    "normalize_evaluation",
    "norwegian_sort_key",
    "page_count",
    "paginate",
    "parse_build_query",
    "parse_corpus_response",
    "parse_word_list",
    "parse_year",
    "percent",
    "sort_rows",
    "summarize",
    "topic_universe",
    "wordbags_from_obj",
    "wordbags_payload",
    "year_bin",
]


# Deferred import so the engine can be used without importing requests.
def __getattr__(name: str):
    if name == "DhlabClient":
        from ._client import DhlabClient
        return DhlabClient
    raise AttributeError(f"module 'ordsok' has no attribute {name!r}")
