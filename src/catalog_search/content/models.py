"""Raw content records as read from the content directory."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    # Front matter and YAML files use camelCase keys
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class Language(_Record):
    id: str
    short: str
    long: str


class SnippetRecord(_Record):
    """A snippet page: markdown body with front matter metadata."""

    # Identity fields stay optional here; the index builder rejects records without them
    id: str | None = None
    title: str | None = None
    short_title: str | None = None
    tags: list[str] = Field(default_factory=list)
    language: str | None = None
    body: str = ""
    excerpt: str = ""
    cover: str | None = None
    date_modified: date | None = None
    listed: bool = True

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tag_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        return value


class CollectionRecord(_Record):
    """A curated collection of snippets."""

    id: str | None = None
    title: str | None = None
    short_title: str | None = None
    mini_title: str | None = None
    description: str = ""
    body: str = ""
    listed: bool = True
    cover: str | None = None
    featured_index: int | None = None
    top_level: bool = False
    parent_id: str | None = None
    snippet_ids: list[str] = Field(default_factory=list)
