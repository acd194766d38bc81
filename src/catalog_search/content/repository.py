"""
Content Repositories

Typed, in-memory query helpers over loaded content records. Each repository
owns an ordered tuple of records; filters return new lists and never mutate it.
"""

import math
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from catalog_search.content.models import CollectionRecord, SnippetRecord

RecordT = TypeVar("RecordT", SnippetRecord, CollectionRecord)


@dataclass(frozen=True)
class Page(Generic[RecordT]):
    """One page of a paginated listing."""

    items: tuple[RecordT, ...]
    page_number: int
    page_count: int
    item_count: int

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.page_count


class _Repository(Generic[RecordT]):
    def __init__(
        self,
        records: Iterable[RecordT],
        ranks: Mapping[str, float] | None = None,
    ):
        self._records: tuple[RecordT, ...] = tuple(records)
        self._by_id: dict[str, RecordT] = {r.id: r for r in self._records if r.id}
        self._ranks: dict[str, float] = dict(ranks or {})

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self._records)

    def all(self) -> tuple[RecordT, ...]:
        return self._records

    def find(self, record_id: str) -> RecordT | None:
        return self._by_id.get(record_id)

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [r for r in self._records if predicate(r)]

    def listed(self) -> list[RecordT]:
        return self.filter(lambda r: r.listed)

    def rank_of(self, record_id: str | None) -> float:
        if record_id is None:
            return 0.0
        return self._ranks.get(record_id, 0.0)

    def ordered_by_rank(self, records: Iterable[RecordT] | None = None) -> list[RecordT]:
        """Highest static rank first; equal ranks keep repository order."""
        items = list(self._records if records is None else records)
        items.sort(key=lambda r: self.rank_of(r.id), reverse=True)
        return items

    def paginate(
        self,
        page_number: int,
        per_page: int,
        records: Iterable[RecordT] | None = None,
    ) -> Page[RecordT]:
        """
        Slice records into a 1-indexed page.

        Raises:
            ValueError: If page_number or per_page is less than 1
        """
        if page_number < 1 or per_page < 1:
            raise ValueError("page_number and per_page must be positive")

        items = tuple(self._records if records is None else records)
        page_count = math.ceil(len(items) / per_page)
        start = (page_number - 1) * per_page

        return Page(
            items=items[start : start + per_page],
            page_number=page_number,
            page_count=page_count,
            item_count=len(items),
        )


class SnippetRepository(_Repository[SnippetRecord]):
    def with_tag(self, tag: str) -> list[SnippetRecord]:
        tag = tag.lower()
        return self.filter(lambda s: tag in (t.lower() for t in s.tags))

    def by_language(self, language_id: str) -> list[SnippetRecord]:
        return self.filter(lambda s: s.language == language_id)


class CollectionRepository(_Repository[CollectionRecord]):
    def primary(self) -> list[CollectionRecord]:
        return self.filter(lambda c: c.top_level)

    def secondary(self) -> list[CollectionRecord]:
        return self.filter(lambda c: c.parent_id is not None)

    def featured(self) -> list[CollectionRecord]:
        featured = self.filter(lambda c: c.featured_index is not None)
        featured.sort(key=lambda c: c.featured_index)
        return featured

    def children(self, parent_id: str) -> list[CollectionRecord]:
        return self.filter(lambda c: c.parent_id == parent_id)

    def parent_of(self, collection: CollectionRecord) -> CollectionRecord | None:
        if collection.parent_id is None:
            return None
        return self.find(collection.parent_id)

    def snippets_for(
        self, collection: CollectionRecord, snippets: SnippetRepository
    ) -> list[SnippetRecord]:
        """Listed snippets of a collection, in the collection's order."""
        result = []
        for snippet_id in collection.snippet_ids:
            snippet = snippets.find(snippet_id)
            if snippet is not None and snippet.listed:
                result.append(snippet)
        return result
