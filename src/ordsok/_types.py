"""Data structures for ordsok."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace

from ._years import percent

# document id -> word-group name -> count
EvaluationResult = dict[str, dict[str, int]]

COUNT = "count"
PERCENT = "percent"
ASC = "asc"
DESC = "desc"

PLACEHOLDER = "-"


@dataclass(slots=True, frozen=True)
class DocumentMeta:
    dhlabid: str | None = None
    urn: str | None = None
    title: str | None = None
    authors: str | None = None  # already flattened, "A, B"
    year: str | None = None


@dataclass(slots=True, frozen=True)
class Wordbag:
    name: str
    words: tuple[str, ...] = ()


class MetadataIndex(Mapping):
    """Read-only metadata lookup with a fixed identifier fallback order.

    Keys are resolved against the canonical ``dhlabid`` table first and then
    against the URN index. A key that matches neither is a miss.
    """

    __slots__ = ("_by_id", "_urn_to_id")

    def __init__(
        self,
        by_id: Mapping[str, DocumentMeta],
        urn_to_id: Mapping[str, str],
    ) -> None:
        self._by_id = by_id
        self._urn_to_id = urn_to_id

    def __getitem__(self, key: str) -> DocumentMeta:
        meta = self._by_id.get(key)
        if meta is not None:
            return meta
        canonical = self._urn_to_id.get(key)
        if canonical is not None and canonical in self._by_id:
            return self._by_id[canonical]
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_id or (
            key in self._urn_to_id and self._urn_to_id[key] in self._by_id  # type: ignore[index]
        )

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)


@dataclass(slots=True)
class Corpus:
    """Documents of one corpus-build session.

    ``meta_by_id`` is keyed by the canonical identifier (dhlabid). ``urns`` is
    the ordered, de-duplicated list sent to the evaluation API.
    """

    urns: list[str] = field(default_factory=list)
    meta_by_id: dict[str, DocumentMeta] = field(default_factory=dict)

    @property
    def metadata(self) -> MetadataIndex:
        urn_to_id = {
            m.urn: doc_id for doc_id, m in self.meta_by_id.items() if m.urn
        }
        return MetadataIndex(self.meta_by_id, urn_to_id)

    def __len__(self) -> int:
        return len(self.urns)


@dataclass(slots=True, frozen=True)
class TableRow:
    id: str
    values: dict[str, float]
    total: float

    @classmethod
    def build(cls, row_id: str, values: dict[str, float]) -> TableRow:
        """Create a row, caching the sum of its values as ``total``."""
        return cls(id=row_id, values=values, total=sum(values.values()))


@dataclass(slots=True, frozen=True)
class ColumnDef:
    key: str
    label: str
    kind: str = COUNT
    year: str | None = None  # bin label, pivoted tables only


@dataclass(slots=True, frozen=True)
class ViewOptions:
    """Immutable view state. Every change produces a new value."""

    sort_key: str = "total"
    sort_dir: str = DESC
    total_threshold: float = 0
    pivot_by_year: bool = False
    year_bin_size: int = 1
    show_percent: bool = False
    page_size: int = 0  # 0 = show all
    page_index: int = 0
    hidden_series: frozenset[str] = frozenset()

    def toggle_sort(self, key: str) -> ViewOptions:
        """Flip direction on the active key, or switch to ``key`` with its default."""
        from ._sort import default_sort_dir

        if key == self.sort_key:
            new_dir = ASC if self.sort_dir == DESC else DESC
            return replace(self, sort_dir=new_dir)
        return replace(self, sort_key=key, sort_dir=default_sort_dir(key))

    def toggle_series(self, series_id: str) -> ViewOptions:
        hidden = set(self.hidden_series)
        hidden.symmetric_difference_update({series_id})
        return replace(self, hidden_series=frozenset(hidden))


@dataclass(slots=True, frozen=True)
class Table:
    rows: list[TableRow]
    columns: list[ColumnDef]
    total_row_count: int
    year_totals: dict[str, float] | None = None
    pivot_by_year: bool = False
    show_percent: bool = False  # percent columns shown; the chart follows it
    page_index: int = 0
    page_count: int = 1
    dropped_documents: int = 0
    metadata: Mapping[str, DocumentMeta] = field(default_factory=dict)

    def cell(self, row: TableRow, column: ColumnDef) -> float:
        """Displayed value of ``column`` for ``row`` (count or percentage)."""
        if column.year is None:
            return row.values.get(column.key, 0)
        count = row.values.get(column.year, 0)
        if column.kind == PERCENT:
            totals = self.year_totals or {}
            return percent(count, totals.get(column.year, 0))
        return count

    def describe(self, row: TableRow) -> tuple[str, str, str]:
        """Title, authors and year of a document row, ``-`` where unknown."""
        meta = self.metadata.get(row.id)
        if meta is None:
            return PLACEHOLDER, PLACEHOLDER, PLACEHOLDER
        return (
            meta.title or PLACEHOLDER,
            meta.authors or PLACEHOLDER,
            meta.year or PLACEHOLDER,
        )


@dataclass(slots=True, frozen=True)
class Series:
    id: str
    values: list[float]


@dataclass(slots=True, frozen=True)
class ChartSeries:
    years: list[str]
    series: list[Series]
    max_value: float


@dataclass(slots=True, frozen=True)
class CorpusSummary:
    document_count: int
    topic_count: int
    grand_total: int
    topic_totals: dict[str, int]
    documents_without_year: int
    first_year: int | None
    last_year: int | None
