"""Test fixtures for catalog search tests."""

import os
import sys
from pathlib import Path

# Set ENVIRONMENT before importing any modules that read configuration
os.environ.setdefault("ENVIRONMENT", "test")

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest  # noqa: E402

from catalog_search.search.models import ContentType, IndexedDocument  # noqa: E402


@pytest.fixture
def make_document():
    """Factory for indexed documents with explicit tokens."""

    def _make(
        doc_id: str,
        tokens: list[str],
        type: ContentType = ContentType.SNIPPET,
        title: str | None = None,
        rank: float = 0.0,
        tag: str = "",
    ) -> IndexedDocument:
        return IndexedDocument(
            id=doc_id,
            title=title or doc_id,
            url=f"/{doc_id}",
            tag=tag,
            type=type,
            search_tokens=tuple(tokens),
            rank=rank,
        )

    return _make


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """A small content directory with languages, snippets and collections."""
    root = tmp_path / "content"
    (root / "languages").mkdir(parents=True)
    (root / "snippets" / "js" / "s").mkdir(parents=True)
    (root / "snippets" / "python" / "s").mkdir(parents=True)
    (root / "collections").mkdir(parents=True)

    (root / "languages" / "javascript.yaml").write_text(
        "id: javascript\nshort: js\nlong: JavaScript\n", encoding="utf-8"
    )
    (root / "languages" / "python.yaml").write_text(
        "id: python\nshort: py\nlong: Python\n", encoding="utf-8"
    )

    (root / "snippets" / "js" / "s" / "array-map.md").write_text(
        "---\n"
        "title: Array map\n"
        "language: javascript\n"
        "tags: [array, function]\n"
        "excerpt: Apply a **function** to every element of an `Array`.\n"
        "dateModified: 2024-01-15\n"
        "---\n"
        "Use `Array.prototype.map()` to create a new array.\n\n"
        "```js\nconst doubled = [1, 2].map(x => x * 2);\n```\n",
        encoding="utf-8",
    )
    (root / "snippets" / "js" / "s" / "promise-all.md").write_text(
        "---\n"
        "title: Promise all settled\n"
        "language: javascript\n"
        "tags: promise, async\n"
        "excerpt: Wait for every promise to settle.\n"
        "---\n"
        "Use `Promise.allSettled()`.\n",
        encoding="utf-8",
    )
    (root / "snippets" / "python" / "s" / "draft.md").write_text(
        "---\n"
        "title: Draft snippet\n"
        "language: python\n"
        "listed: false\n"
        "excerpt: Not ready yet.\n"
        "---\n"
        "Work in progress.\n",
        encoding="utf-8",
    )

    (root / "collections" / "promises.yaml").write_text(
        "id: js/promises\n"
        "title: Promises collection\n"
        "description: Everything about JavaScript promises.\n"
        "topLevel: true\n"
        "featuredIndex: 1\n"
        "snippetIds:\n"
        "  - js/s/promise-all\n",
        encoding="utf-8",
    )
    return root
