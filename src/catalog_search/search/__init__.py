"""Catalog search: tokenization, ranking, index building and keyphrase search."""

from catalog_search.search.indexer import IndexBuilder, parse_index, read_index, write_index
from catalog_search.search.models import ContentType, IndexedDocument, SearchIndexArtifact
from catalog_search.search.ranking import Ranker, RankingConfig
from catalog_search.search.render import ResultsRenderer
from catalog_search.search.searcher import QueryEngine, SearchHit, SearchResults, SearchState
from catalog_search.search.session import SearchSession, SessionState
from catalog_search.search.stats import search_tokens_frequency

__all__ = [
    "IndexBuilder",
    "parse_index",
    "read_index",
    "write_index",
    "ContentType",
    "IndexedDocument",
    "SearchIndexArtifact",
    "Ranker",
    "RankingConfig",
    "ResultsRenderer",
    "QueryEngine",
    "SearchHit",
    "SearchResults",
    "SearchState",
    "SearchSession",
    "SessionState",
    "search_tokens_frequency",
]
