"""Adapters that normalize DH-lab responses and user input.

Every function here either returns a well-typed value or raises
OrdsokParseError; the table engine only ever sees the normalized shapes.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from ._errors import OrdsokParseError
from ._types import Corpus, DocumentMeta, EvaluationResult, Wordbag

logger = logging.getLogger(__name__)

MAX_CORPUS = 50_000

_LIST_SPLIT_RE = re.compile(r"[,;\n]+")
_QUERY_TOKEN_RE = re.compile(r"^([a-zA-Z_]+)\s*[:=]\s*(.+)$")

BUILD_QUERY_KEYS = frozenset({
    "doctype", "author", "freetext", "fulltext",
    "from_year", "to_year", "from_timestamp", "to_timestamp",
    "title", "ddk", "subject", "publisher", "literaryform",
    "genres", "city", "lang", "limit", "order_by",
})
_NUMERIC_QUERY_KEYS = frozenset({
    "from_year", "to_year", "from_timestamp", "to_timestamp", "limit",
})

_ID_FIELDS = ("dhlabid", "dhlabId", "id")
_URN_FIELDS = ("urn", "URN")


# -- User input --

def parse_word_list(text: str) -> list[str]:
    """Split a word list on commas, semicolons and newlines."""
    return [w.strip() for w in _LIST_SPLIT_RE.split(text) if w.strip()]


def _to_number(value: str) -> int | float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_build_query(text: str) -> dict[str, Any] | None:
    """Turn ``author: Ibsen, from_year: 1880`` into build-corpus parameters.

    Unknown keys are ignored. Input without any recognised ``key: value``
    token is sent as free text. Empty input returns None.
    """
    text = text.strip()
    if not text:
        return None

    params: dict[str, Any] = {}
    for token in _LIST_SPLIT_RE.split(text):
        m = _QUERY_TOKEN_RE.match(token.strip())
        if not m:
            continue
        key = m.group(1).lower()
        value = m.group(2).strip()
        if key not in BUILD_QUERY_KEYS:
            continue
        if key in _NUMERIC_QUERY_KEYS:
            number = _to_number(value)
            if number is not None:
                params[key] = number
                continue
        params[key] = value

    return params or {"freetext": text}


# -- Wordbags --

def wordbags_from_obj(obj: Any) -> list[Wordbag]:
    """Wordbags from decoded JSON: ``[{name, words}]`` or ``{name: [words]}``.

    Bags without a name or without words are dropped.
    """
    bags: list[Wordbag] = []
    if isinstance(obj, Mapping):
        for name, words in obj.items():
            if isinstance(words, Sequence) and not isinstance(words, str):
                bags.append(Wordbag(str(name), tuple(str(w) for w in words)))
    elif isinstance(obj, Sequence) and not isinstance(obj, str):
        for item in obj:
            if not isinstance(item, Mapping):
                continue
            name, words = item.get("name"), item.get("words")
            if not name or not isinstance(words, Sequence) or isinstance(words, str):
                continue
            bags.append(Wordbag(str(name), tuple(str(w) for w in words)))
    else:
        raise OrdsokParseError(
            f"Wordbags must be a list or an object, got {type(obj).__name__}"
        )
    return [b for b in bags if b.name.strip() and b.words]


def wordbags_payload(wordbags: Sequence[Wordbag]) -> dict[str, list[str]]:
    """Request body form ``{name: [words]}``; later duplicates win."""
    payload: dict[str, list[str]] = {}
    for bag in wordbags:
        name = bag.name.strip()
        if name:
            payload[name] = list(bag.words)
    return payload


# -- Build-corpus response --

def normalize_authors(value: Any) -> str | None:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if isinstance(value, str):
        return value
    return None


def _first(record: Mapping[str, Any], fields: Sequence[str]) -> Any:
    for f in fields:
        value = record.get(f)
        if value is not None:
            return value
    return None


def _id_string(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, str) and value:
        return value
    return None


def _year_string(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _id_string(value)
    if isinstance(value, str):
        return value
    return None


def _is_urn(value: Any) -> bool:
    return isinstance(value, str) and value.upper().startswith("URN:")


def _add_record(
    record: Mapping[str, Any],
    urns: list[str],
    meta_by_id: dict[str, DocumentMeta],
) -> None:
    dhlabid = _id_string(_first(record, _ID_FIELDS))
    urn = _first(record, _URN_FIELDS)
    if _is_urn(urn):
        urns.append(urn)
    if dhlabid is None:
        return
    title = record.get("title")
    meta_by_id[dhlabid] = DocumentMeta(
        dhlabid=dhlabid,
        urn=urn if isinstance(urn, str) else None,
        title=title if isinstance(title, str) else None,
        authors=normalize_authors(record.get("authors")),
        year=_year_string(record.get("year")),
    )


def _unique(items: list[str], limit: int) -> list[str]:
    unique = list(dict.fromkeys(items))
    if len(unique) > limit:
        logger.warning(
            "Corpus has %d documents; keeping the first %d", len(unique), limit,
        )
    return unique[:limit]


def parse_corpus_response(data: Any, *, limit: int = MAX_CORPUS) -> Corpus:
    """Normalize a build-corpus response into a Corpus.

    Accepts a list of records or a column-oriented object
    (``{"dhlabid": {"0": ...}, "urn": {"0": ...}, ...}``). Anything else
    yields an empty corpus.
    """
    urns: list[str] = []
    meta_by_id: dict[str, DocumentMeta] = {}

    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        for item in data:
            if isinstance(item, Mapping):
                _add_record(item, urns, meta_by_id)
        return Corpus(urns=_unique(urns, limit), meta_by_id=meta_by_id)

    if not isinstance(data, Mapping):
        return Corpus()

    id_column = data.get("dhlabid")
    if not isinstance(id_column, Mapping):
        return Corpus()

    columns = {
        name: data.get(name) if isinstance(data.get(name), Mapping) else {}
        for name in ("title", "authors", "year")
    }
    urn_column = _first(data, _URN_FIELDS)
    columns["urn"] = urn_column if isinstance(urn_column, Mapping) else {}
    columns["dhlabid"] = id_column

    indices: dict[str, None] = dict.fromkeys(id_column)
    for column in columns.values():
        indices.update(dict.fromkeys(column))

    for index in indices:
        record = {name: column.get(index) for name, column in columns.items()}
        _add_record(record, urns, meta_by_id)

    return Corpus(urns=_unique(urns, limit), meta_by_id=meta_by_id)


# -- Evaluation response --

def _count(value: Any, where: str) -> int | float:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise OrdsokParseError(f"Count for {where} is a boolean")
    if isinstance(value, str):
        number = _to_number(value.strip())
        if number is None:
            raise OrdsokParseError(f"Count for {where} is not a number: {value!r}")
        value = number
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if not math.isfinite(value):
            raise OrdsokParseError(f"Count for {where} is not finite")
        if value.is_integer():
            value = int(value)
    if not isinstance(value, (int, float)):
        raise OrdsokParseError(
            f"Count for {where} has unsupported type {type(value).__name__}"
        )
    if value < 0:
        raise OrdsokParseError(f"Count for {where} is negative: {value}")
    return value


def _from_index(data: Mapping[str, Any]) -> EvaluationResult:
    result: EvaluationResult = {}
    for doc_id, counts in data.items():
        if counts is None:
            result[str(doc_id)] = {}
            continue
        if not isinstance(counts, Mapping):
            raise OrdsokParseError(f"Counts for document {doc_id!r} are not an object")
        result[str(doc_id)] = {
            str(topic): _count(value, f"{doc_id}/{topic}")
            for topic, value in counts.items()
        }
    return result


def _from_columns(data: Mapping[str, Any]) -> EvaluationResult:
    result: EvaluationResult = {}
    for topic, by_doc in data.items():
        if not isinstance(by_doc, Mapping):
            raise OrdsokParseError(f"Column {topic!r} is not an object")
        for doc_id, value in by_doc.items():
            result.setdefault(str(doc_id), {})[str(topic)] = _count(
                value, f"{doc_id}/{topic}"
            )
    return result


def _from_split(data: Mapping[str, Any]) -> EvaluationResult:
    index, columns, rows = data["index"], data["columns"], data["data"]
    if not all(isinstance(x, Sequence) for x in (index, columns, rows)):
        raise OrdsokParseError("Split response needs list index/columns/data")
    if len(index) != len(rows):
        raise OrdsokParseError(
            f"Split response has {len(index)} index entries but {len(rows)} rows"
        )
    result: EvaluationResult = {}
    for doc_id, values in zip(index, rows):
        if not isinstance(values, Sequence) or len(values) != len(columns):
            raise OrdsokParseError(f"Row for document {doc_id!r} has the wrong width")
        result[str(doc_id)] = {
            str(topic): _count(value, f"{doc_id}/{topic}")
            for topic, value in zip(columns, values)
        }
    return result


def _from_records(data: Sequence[Any]) -> EvaluationResult:
    result: EvaluationResult = {}
    for i, record in enumerate(data):
        if not isinstance(record, Mapping):
            raise OrdsokParseError(f"Record {i} is not an object")
        doc_id = _id_string(_first(record, _ID_FIELDS + _URN_FIELDS))
        if doc_id is None:
            raise OrdsokParseError(f"Record {i} has no document identifier")
        result[doc_id] = {
            str(topic): _count(value, f"{doc_id}/{topic}")
            for topic, value in record.items()
            if topic not in _ID_FIELDS and topic not in _URN_FIELDS
        }
    return result


def normalize_evaluation(data: Any, orient: str = "index") -> EvaluationResult:
    """Normalize an evaluation response to ``{doc: {word-group: count}}``.

    Args:
        data: Decoded JSON. A ``{"index", "columns", "data"}`` object and a
            list of records are recognised automatically.
        orient: For nested objects, "index" when documents are the outer
            keys, "columns" when word-groups are.

    Raises:
        OrdsokParseError: If the shape or any count is unusable.
    """
    if data is None:
        return {}
    if isinstance(data, Mapping):
        if {"index", "columns", "data"} <= data.keys():
            return _from_split(data)
        if orient == "index":
            return _from_index(data)
        if orient == "columns":
            return _from_columns(data)
        raise OrdsokParseError(f"Unknown orient {orient!r}")
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        return _from_records(data)
    raise OrdsokParseError(
        f"Evaluation response must be an object or a list, got {type(data).__name__}"
    )
