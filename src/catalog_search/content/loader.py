"""Content directory loader.

Reads the raw catalog content:

    content/
      languages/*.yaml         id, short, long
      snippets/**/*.md         YAML front matter + markdown body
      collections/*.yaml       id, title, description, snippetIds, ...

A snippet's id is its path below ``snippets/`` without the ``.md`` suffix,
e.g. ``js/s/array-map``.

Example snippet file:
    ---
    title: Map an array
    language: javascript
    tags: [array]
    excerpt: Apply a function to each element of an array.
    ---
    Use `Array.prototype.map()` ...
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from catalog_search.content.models import CollectionRecord, Language, SnippetRecord
from catalog_search.core.errors import ContentLoadError

logger = logging.getLogger(__name__)

DELIMITER = "---"

_FRONT_MATTER = re.compile(
    rf"^{re.escape(DELIMITER)}\s*\n(.*?)\n{re.escape(DELIMITER)}\s*(?:\n|$)", re.DOTALL
)


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter from markdown content.

    Returns:
        Tuple of (front_matter_dict, markdown_content).
        If no front matter found, returns (empty dict, original content)

    Raises:
        ContentLoadError: If the front matter is not a valid YAML mapping
    """
    match = _FRONT_MATTER.match(content)
    if not match:
        return {}, content

    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise ContentLoadError(f"Invalid front matter: {e}") from e

    if not isinstance(metadata, dict):
        raise ContentLoadError("Front matter must be a mapping")

    return metadata, content[match.end() :]


@dataclass
class ContentBundle:
    snippets: list[SnippetRecord] = field(default_factory=list)
    collections: list[CollectionRecord] = field(default_factory=list)
    languages: dict[str, Language] = field(default_factory=dict)


class ContentLoader:
    """Loads content records from a content directory."""

    def __init__(self, content_dir: str | Path):
        self.content_dir = Path(content_dir)

    def load(self) -> ContentBundle:
        if not self.content_dir.is_dir():
            raise ContentLoadError(f"Content directory not found: {self.content_dir}")

        bundle = ContentBundle(
            snippets=self.load_snippets(),
            collections=self.load_collections(),
            languages=self.load_languages(),
        )
        logger.info(
            "Loaded %s snippets, %s collections, %s languages from %s",
            len(bundle.snippets),
            len(bundle.collections),
            len(bundle.languages),
            self.content_dir,
        )
        return bundle

    def load_languages(self) -> dict[str, Language]:
        languages: dict[str, Language] = {}
        for path in self._files("languages", "*.yaml"):
            language = self._validate(Language, self._read_yaml(path), path)
            languages[language.id] = language
        return languages

    def load_snippets(self) -> list[SnippetRecord]:
        snippets_dir = self.content_dir / "snippets"
        snippets = []
        for path in self._files("snippets", "**/*.md"):
            metadata, body = parse_front_matter(self._read_text(path))
            snippet_id = path.relative_to(snippets_dir).with_suffix("").as_posix()
            data = {**metadata, "id": snippet_id, "body": body.strip()}
            snippets.append(self._validate(SnippetRecord, data, path))
        return snippets

    def load_collections(self) -> list[CollectionRecord]:
        return [
            self._validate(CollectionRecord, self._read_yaml(path), path)
            for path in self._files("collections", "*.yaml")
        ]

    def _files(self, subdir: str, pattern: str) -> list[Path]:
        base = self.content_dir / subdir
        if not base.is_dir():
            logger.warning("No %s directory in %s", subdir, self.content_dir)
            return []
        return sorted(p for p in base.glob(pattern) if p.is_file())

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContentLoadError(f"Cannot read {path}: {e}") from e

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            data = yaml.safe_load(self._read_text(path)) or {}
        except yaml.YAMLError as e:
            raise ContentLoadError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ContentLoadError(f"Expected a mapping in {path}")
        return data

    def _validate(self, model, data: dict[str, Any], path: Path):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ContentLoadError(f"Invalid content in {path}: {e}") from e
