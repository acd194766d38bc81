"""
Search Index Builder

Builds the search index artifact from raw content records.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from catalog_search.analyzer import SearchAnalyzer, analyzer as default_analyzer
from catalog_search.content.models import CollectionRecord, Language, SnippetRecord
from catalog_search.core.errors import IndexFormatError, InvalidContentError
from catalog_search.search.models import (
    ContentType,
    IndexedDocument,
    SearchIndexArtifact,
)
from catalog_search.search.ranking import Ranker

logger = logging.getLogger(__name__)

COLLECTION_TAG = "Collection"


def _require_identity(record: SnippetRecord | CollectionRecord) -> tuple[str, str]:
    """Return (id, title) or fail; identity fields are never defaulted."""
    record_id = (record.id or "").strip()
    if not record_id:
        raise InvalidContentError(None, "id")
    title = (record.title or "").strip()
    if not title:
        raise InvalidContentError(record_id, "title")
    return record_id, title


def _indexable_text(*parts: str | None) -> str:
    return " ".join(p for p in parts if p).lower()


class IndexBuilder:
    """Turns content records into immutable index documents."""

    def __init__(
        self,
        ranker: Ranker | None = None,
        analyzer: SearchAnalyzer | None = None,
    ):
        self.analyzer = analyzer or default_analyzer
        self.ranker = ranker or Ranker(analyzer=self.analyzer)

    def build_snippet(
        self, record: SnippetRecord, language: Language | None = None
    ) -> IndexedDocument:
        """
        Index a snippet.

        Tokens come from the excerpt and title only; the rank covers the full
        indexable text (title, tags, language, body, excerpt).

        Raises:
            InvalidContentError: If id or title is missing
        """
        record_id, title = _require_identity(record)

        tokens = self._tokens(f"{record.excerpt} {title}")
        rank = self.ranker.rank(
            _indexable_text(
                title,
                *record.tags,
                language.long if language else None,
                record.body,
                record.excerpt,
            )
        )

        if language is not None:
            tag = language.long
        elif record.tags:
            tag = record.tags[0].title()
        else:
            tag = ""

        return IndexedDocument(
            id=record_id,
            title=title,
            url=f"/{record_id}",
            tag=tag,
            type=ContentType.SNIPPET,
            search_tokens=tuple(tokens),
            rank=rank,
        )

    def build_collection(self, record: CollectionRecord) -> IndexedDocument:
        """
        Index a collection.

        Raises:
            InvalidContentError: If id or title is missing
        """
        record_id, title = _require_identity(record)

        tokens = self._tokens(f"{record.description} {title}")
        rank = self.ranker.rank(
            _indexable_text(title, record.description, record.body)
        )

        return IndexedDocument(
            id=record_id,
            title=title,
            url=f"/{record_id}",
            tag=COLLECTION_TAG,
            type=ContentType.COLLECTION,
            search_tokens=tuple(tokens),
            rank=rank,
        )

    def build(
        self,
        snippets: Iterable[SnippetRecord],
        collections: Iterable[CollectionRecord] = (),
        languages: Mapping[str, Language] | None = None,
        strict: bool = True,
    ) -> list[IndexedDocument]:
        """
        Build the full search index, sorted by descending rank.

        Args:
            snippets: Snippet records
            collections: Collection records
            languages: Language records keyed by id
            strict: Abort on the first invalid record (otherwise log and skip it)

        Returns:
            Listed documents, highest rank first (ties keep input order)
        """
        languages = languages or {}
        documents: list[IndexedDocument] = []

        for collection in collections:
            if not collection.listed:
                logger.debug("Skipping unlisted collection %s", collection.id)
                continue
            doc = self._build_one(self.build_collection, collection, strict=strict)
            if doc is not None:
                documents.append(doc)

        for snippet in snippets:
            if not snippet.listed:
                logger.debug("Skipping unlisted snippet %s", snippet.id)
                continue
            language = languages.get(snippet.language) if snippet.language else None
            if snippet.language and language is None:
                logger.warning(
                    "Unknown language '%s' for snippet %s", snippet.language, snippet.id
                )
            doc = self._build_one(
                self.build_snippet, snippet, language, strict=strict
            )
            if doc is not None:
                documents.append(doc)

        documents.sort(key=lambda d: d.rank, reverse=True)
        logger.info("Built search index: %s documents", len(documents))
        return documents

    def _build_one(self, build_func, *args: Any, strict: bool) -> IndexedDocument | None:
        try:
            return build_func(*args)
        except InvalidContentError as e:
            if strict:
                raise
            logger.error("Skipping invalid content record: %s", e)
            return None

    def _tokenize(self, text: str) -> list[str]:
        return self.analyzer.tokenize(text)

    def _tokens(self, text: str) -> list[str]:
        """Tokenize markdown source (stripped before tokenizing)."""
        return self._tokenize(self.analyzer.strip_markdown(text))


def write_index(path: str | Path, documents: Iterable[IndexedDocument]) -> Path:
    """Serialize documents into the search index artifact."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    artifact = SearchIndexArtifact(search_index=list(documents))
    path.write_text(artifact.model_dump_json(by_alias=True), encoding="utf-8")
    logger.info(
        "Wrote search index (%s documents) to %s", len(artifact.search_index), path
    )
    return path


def parse_index(payload: str | bytes | Mapping[str, Any]) -> list[IndexedDocument]:
    """
    Validate a search index payload.

    Raises:
        IndexFormatError: If the payload does not have the artifact shape
    """
    try:
        if isinstance(payload, (str, bytes)):
            artifact = SearchIndexArtifact.model_validate_json(payload)
        else:
            artifact = SearchIndexArtifact.model_validate(payload)
    except ValidationError as e:
        raise IndexFormatError(f"Invalid search index: {e}") from e
    return artifact.search_index


def read_index(path: str | Path) -> list[IndexedDocument]:
    """Load the search index artifact from disk."""
    return parse_index(Path(path).read_bytes())
