"""Content records, loading and repositories."""

from catalog_search.content.models import CollectionRecord, Language, SnippetRecord
from catalog_search.content.repository import (
    CollectionRepository,
    Page,
    SnippetRepository,
)

__all__ = [
    "CollectionRecord",
    "Language",
    "SnippetRecord",
    "CollectionRepository",
    "Page",
    "SnippetRepository",
]
