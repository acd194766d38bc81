"""
Keyphrase Search Engine

Scores every indexed document against the query tokens and returns the
matches partitioned by content type.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from catalog_search.analyzer import SearchAnalyzer, analyzer as default_analyzer
from catalog_search.search.models import ContentType, IndexedDocument

MIN_QUERY_LENGTH = 2
MATCH_THRESHOLD = 0.3  # Exclusive: a document must match more than this share
MAX_COLLECTIONS = 5
MAX_SNIPPETS = 100


class SearchState(str, Enum):
    PROMPT = "prompt"  # Query too short, nothing scored
    RESULTS = "results"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SearchHit:
    """A matching document paired with its match score for one query."""

    document: IndexedDocument
    score: float


@dataclass
class SearchResults:
    """Search results partitioned by content type."""

    query: str
    state: SearchState
    collections: list[SearchHit] = field(default_factory=list)
    snippets: list[SearchHit] = field(default_factory=list)
    total: int = 0  # Match count before truncation

    def __len__(self) -> int:
        return len(self.collections) + len(self.snippets)


class QueryEngine:
    """
    In-memory keyphrase search over a loaded search index.

    The match score of a document is the share of query tokens present in its
    token set (presence only, not frequency):

        score(q, d) = |tokens(q) ∩ tokens(d)| / |tokens(q)|

    Documents scoring above ``MATCH_THRESHOLD`` are returned, best first.
    """

    def __init__(
        self,
        documents: Iterable[IndexedDocument],
        analyzer: SearchAnalyzer | None = None,
        threshold: float = MATCH_THRESHOLD,
        max_collections: int = MAX_COLLECTIONS,
        max_snippets: int = MAX_SNIPPETS,
    ):
        self.documents: tuple[IndexedDocument, ...] = tuple(documents)
        self.analyzer = analyzer or default_analyzer
        self.threshold = threshold
        self.max_collections = max_collections
        self.max_snippets = max_snippets

    def search(self, query: str) -> SearchResults:
        """
        Search documents by keyphrase.

        Args:
            query: Raw user input

        Returns:
            SearchResults; ``PROMPT`` state for queries shorter than two characters
        """
        query = query or ""
        if len(query.strip()) < MIN_QUERY_LENGTH:
            return SearchResults(query=query, state=SearchState.PROMPT)

        # 1. Tokenize query (same analyzer as the index)
        tokens = self.analyzer.tokenize(query)
        if not tokens:
            return self._not_found(query)

        # 2. Score every document
        scored = [
            SearchHit(document=doc, score=self.match_score(tokens, doc))
            for doc in self.documents
        ]

        # 3. Filter by relevance threshold
        matches = [hit for hit in scored if hit.score > self.threshold]
        if not matches:
            return self._not_found(query)

        # 4. Sort by score (descending, stable for equal scores)
        matches.sort(key=lambda hit: hit.score, reverse=True)

        # 5. Partition by type and cap
        collections = [
            hit for hit in matches if hit.document.type == ContentType.COLLECTION
        ]
        snippets = [
            hit for hit in matches if hit.document.type != ContentType.COLLECTION
        ]

        return SearchResults(
            query=query,
            state=SearchState.RESULTS,
            collections=collections[: self.max_collections],
            snippets=snippets[: self.max_snippets],
            total=len(matches),
        )

    @staticmethod
    def match_score(tokens: list[str], document: IndexedDocument) -> float:
        """Share of query tokens found in the document token set."""
        if not tokens:
            return 0.0
        found = sum(1 for token in tokens if token in document.token_set)
        return found / len(tokens)

    def _not_found(self, query: str) -> SearchResults:
        return SearchResults(query=query, state=SearchState.NOT_FOUND)
