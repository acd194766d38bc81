"""Search index data models (shared by the index builder and the query engine)."""

from enum import Enum
from functools import cached_property
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from catalog_search.analyzer import join_tokens, split_tokens


class ContentType(str, Enum):
    COLLECTION = "collection"
    SNIPPET = "snippet"


class IndexedDocument(BaseModel):
    """
    A single entry of the search index.

    Immutable once built. ``rank`` is the static, query-independent ranking
    score; the per-query match score lives on ``SearchHit`` instead.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    url: str
    tag: str = ""
    type: ContentType
    search_tokens: tuple[str, ...] = Field(default=(), alias="searchTokens")
    rank: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _default_id_from_url(cls, data: Any) -> Any:
        # Artifacts written without ids identify documents by url
        if isinstance(data, dict) and not data.get("id") and isinstance(data.get("url"), str):
            return {**data, "id": data["url"].lstrip("/")}
        return data

    @field_validator("search_tokens", mode="before")
    @classmethod
    def _split_stored_tokens(cls, value: Any) -> Any:
        # Stored form is a delimiter-joined string
        if isinstance(value, str):
            return tuple(split_tokens(value))
        return value

    @field_serializer("search_tokens")
    def _join_stored_tokens(self, tokens: tuple[str, ...]) -> str:
        return join_tokens(list(tokens))

    @cached_property
    def token_set(self) -> frozenset[str]:
        return frozenset(self.search_tokens)


class SearchIndexArtifact(BaseModel):
    """Serialized shape of ``search-data.json``."""

    model_config = ConfigDict(populate_by_name=True)

    search_index: list[IndexedDocument] = Field(alias="searchIndex")
