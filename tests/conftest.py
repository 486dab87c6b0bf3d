"""Shared fixtures for ordsok tests."""

import random

import pytest

from ordsok import DocumentMeta


@pytest.fixture
def result():
    """Two documents; doc2 omits the "war" group entirely."""
    return {"doc1": {"nature": 3, "war": 0}, "doc2": {"nature": 5}}


@pytest.fixture
def meta():
    return {
        "doc1": DocumentMeta(dhlabid="doc1", title="Skogen", authors="Hamsun, Knut", year="1994"),
        "doc2": DocumentMeta(dhlabid="doc2", title="Fjorden", authors="Undset, Sigrid", year="1988"),
    }


def make_corpus(n_docs: int, seed: int = 0):
    """Deterministic random evaluation result with sparse rows and some missing years."""
    rng = random.Random(seed)
    topics = ["natur", "krig", "kjærlighet", "by", "hav", "religion"]
    result = {}
    meta = {}
    for i in range(n_docs):
        doc_id = str(100000 + i)
        result[doc_id] = {
            t: rng.randint(0, 40) for t in topics if rng.random() < 0.7
        }
        year = None if rng.random() < 0.05 else str(rng.randint(1850, 2020))
        meta[doc_id] = DocumentMeta(
            dhlabid=doc_id,
            title=f"Bok {rng.randint(0, 9999)}",
            authors=rng.choice(["Ibsen", "Øverland", "Ås", "Bjørnson", None]),
            year=year,
        )
    return result, meta


@pytest.fixture(scope="session")
def corpus_small():
    return make_corpus(200, seed=1)


@pytest.fixture(scope="session")
def corpus_factory():
    return make_corpus
