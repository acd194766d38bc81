"""Tests for search token statistics."""

from catalog_search.search.models import ContentType
from catalog_search.search.stats import search_tokens_frequency


def test_counts_snippet_tokens(make_document):
    docs = [
        make_document("s1", ["array", "map", "js"]),
        make_document("s2", ["array", "filter"]),
        make_document("c1", ["array"], type=ContentType.COLLECTION),
    ]
    frequencies = search_tokens_frequency(docs)

    assert frequencies == {"array": 2, "map": 1, "filter": 1}
    assert list(frequencies) == ["array", "map", "filter"]


def test_min_length(make_document):
    docs = [make_document("s1", ["js", "map", "array"])]
    assert search_tokens_frequency(docs, min_length=4) == {"array": 1}
    assert search_tokens_frequency(docs, min_length=2) == {"js": 1, "map": 1, "array": 1}


def test_empty():
    assert search_tokens_frequency([]) == {}
