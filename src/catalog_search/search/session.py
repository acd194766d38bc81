"""
Search Session

Owns the one-time search index fetch and gates searches on it:

    UNINITIALIZED --prepare()--> LOADING --fetch resolves--> READY

Searches issued before READY are dropped, not queued; the search box issues
a new search on every keystroke anyway.
"""

import asyncio
import logging
from collections.abc import Iterable
from enum import Enum

import httpx

from catalog_search.search.indexer import parse_index
from catalog_search.search.models import IndexedDocument
from catalog_search.search.searcher import QueryEngine, SearchResults

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class SearchSession:
    """A search-box session over a lazily fetched search index."""

    def __init__(self, index_url: str, timeout: float = 10.0):
        self.index_url = index_url
        self.timeout = timeout
        self._state = SessionState.UNINITIALIZED
        self._engine: QueryEngine | None = None
        self._load_task: asyncio.Task | None = None
        self.error: Exception | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == SessionState.READY

    @property
    def engine(self) -> QueryEngine | None:
        return self._engine

    def prepare(self) -> asyncio.Task | None:
        """
        Start fetching the index in the background (fire-and-forget).

        Must be called from a running event loop. Only the first call starts
        a fetch; later calls are no-ops and return None.
        """
        if self._state != SessionState.UNINITIALIZED:
            return None
        self._state = SessionState.LOADING
        self._load_task = asyncio.get_running_loop().create_task(self._fetch())
        return self._load_task

    async def load(self) -> bool:
        """
        Fetch the index and wait for it.

        Returns:
            True if the session is READY afterwards
        """
        if self._state == SessionState.UNINITIALIZED:
            self._state = SessionState.LOADING
            await self._fetch()
        elif self._load_task is not None:
            await self._load_task
        return self.is_ready

    def load_documents(self, documents: Iterable[IndexedDocument]) -> None:
        """Make the session READY from an already loaded index."""
        self._become_ready(documents)

    def search(self, query: str) -> SearchResults | None:
        """
        Run a search if the index is loaded.

        Returns:
            SearchResults, or None when the search was dropped (index not READY)
        """
        if self._engine is None:
            logger.debug("Dropping search while %s: %r", self._state.value, query)
            return None
        return self._engine.search(query)

    async def _fetch(self) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.index_url)
                resp.raise_for_status()
                documents = parse_index(resp.content)
        except Exception as e:
            # No retry: the session simply never becomes READY
            self.error = e
            logger.error(
                "Failed to load search index from %s: %s",
                self.index_url,
                e,
                exc_info=True,
            )
            return

        self._become_ready(documents)

    def _become_ready(self, documents: Iterable[IndexedDocument]) -> None:
        if self.is_ready:
            logger.warning("Search index already loaded; ignoring reload")
            return
        self._engine = QueryEngine(documents)
        self._state = SessionState.READY
        logger.info(
            "Search index ready: %s documents", len(self._engine.documents)
        )
