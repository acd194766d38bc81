"""
Tests for the search index builder and artifact
"""

import json

import pytest

from catalog_search.content.models import CollectionRecord, Language, SnippetRecord
from catalog_search.core.errors import IndexFormatError, InvalidContentError
from catalog_search.search.indexer import (
    IndexBuilder,
    parse_index,
    read_index,
    write_index,
)
from catalog_search.search.models import ContentType
from catalog_search.search.ranking import Ranker
from catalog_search.search.searcher import QueryEngine


@pytest.fixture
def javascript():
    return Language(id="javascript", short="js", long="JavaScript")


@pytest.fixture
def array_map():
    return SnippetRecord(
        id="js/s/array-map",
        title="Array map",
        tags=["array", "function"],
        language="javascript",
        body="Use `Array.prototype.map()` to iterate over elements and transform them.",
        excerpt="Apply a **function** to every element.",
    )


class TestBuildSnippet:
    """Tests for IndexBuilder.build_snippet."""

    def test_tokens_from_excerpt_and_title(self, array_map, javascript):
        doc = IndexBuilder().build_snippet(array_map, javascript)

        assert doc.search_tokens == ("apply", "function", "every", "element", "array", "map")
        # Body words are ranked but not tokenized
        assert "iterate" not in doc.token_set

    def test_identity_and_type(self, array_map, javascript):
        doc = IndexBuilder().build_snippet(array_map, javascript)

        assert doc.id == "js/s/array-map"
        assert doc.url == "/js/s/array-map"
        assert doc.title == "Array map"
        assert doc.type == ContentType.SNIPPET
        assert doc.tag == "JavaScript"

    def test_tag_falls_back_to_first_tag(self, array_map):
        doc = IndexBuilder().build_snippet(array_map)
        assert doc.tag == "Array"

    def test_rank_covers_full_text(self, array_map, javascript):
        ranker = Ranker()
        doc = IndexBuilder(ranker=ranker).build_snippet(array_map, javascript)

        expected = ranker.rank(
            " ".join(
                [
                    "Array map",
                    "array",
                    "function",
                    "JavaScript",
                    array_map.body,
                    array_map.excerpt,
                ]
            ).lower()
        )
        assert doc.rank == expected
        assert doc.rank > 0

    def test_missing_title_fails(self):
        record = SnippetRecord(id="js/s/untitled", excerpt="No title here")
        with pytest.raises(InvalidContentError) as exc_info:
            IndexBuilder().build_snippet(record)
        assert exc_info.value.field == "title"
        assert exc_info.value.record_id == "js/s/untitled"

    def test_blank_id_fails(self):
        record = SnippetRecord(id="  ", title="Orphan")
        with pytest.raises(InvalidContentError) as exc_info:
            IndexBuilder().build_snippet(record)
        assert exc_info.value.field == "id"


class TestBuildCollection:
    """Tests for IndexBuilder.build_collection."""

    def test_collection_document(self):
        record = CollectionRecord(
            id="js/promises",
            title="Promises collection",
            description="Everything about [promises](https://example.com).",
            body="Long form introduction to asynchronous code.",
        )
        doc = IndexBuilder().build_collection(record)

        assert doc.type == ContentType.COLLECTION
        assert doc.tag == "Collection"
        assert doc.url == "/js/promises"
        assert doc.search_tokens == ("everything", "promises", "collection")

    def test_missing_id_fails(self):
        with pytest.raises(InvalidContentError):
            IndexBuilder().build_collection(CollectionRecord(title="No id"))


class TestBuild:
    """Tests for IndexBuilder.build."""

    def test_sorted_by_rank_descending(self, javascript):
        short = SnippetRecord(id="a", title="Sum", excerpt="Add numbers.")
        long = SnippetRecord(
            id="b",
            title="Deep clone object",
            excerpt="Create a deep clone of an object, including nested arrays.",
            body="Use recursion to clone every nested object and array value.",
            language="javascript",
        )
        docs = IndexBuilder().build([short, long], languages={"javascript": javascript})

        assert [d.id for d in docs] == ["b", "a"]
        assert docs[0].rank >= docs[1].rank

    def test_equal_ranks_keep_input_order(self):
        first = SnippetRecord(id="first", title="Array map")
        second = SnippetRecord(id="second", title="Array map")
        docs = IndexBuilder().build([first, second])
        assert [d.id for d in docs] == ["first", "second"]

    def test_collections_and_snippets(self, array_map, javascript):
        collection = CollectionRecord(id="js/arrays", title="Arrays")
        docs = IndexBuilder().build(
            [array_map], [collection], {"javascript": javascript}
        )
        assert {d.type for d in docs} == {ContentType.SNIPPET, ContentType.COLLECTION}

    def test_unlisted_records_skipped(self, array_map):
        hidden = SnippetRecord(id="hidden", title="Hidden", listed=False)
        hidden_collection = CollectionRecord(id="c", title="C", listed=False)
        docs = IndexBuilder().build([array_map, hidden], [hidden_collection])
        assert [d.id for d in docs] == ["js/s/array-map"]

    def test_strict_build_aborts(self, array_map):
        broken = SnippetRecord(id="broken")
        with pytest.raises(InvalidContentError):
            IndexBuilder().build([array_map, broken])

    def test_lenient_build_skips_invalid(self, array_map, caplog):
        broken = SnippetRecord(id="broken")
        docs = IndexBuilder().build([array_map, broken], strict=False)

        assert [d.id for d in docs] == ["js/s/array-map"]
        assert "broken" in caplog.text


class TestIndexArtifact:
    """Tests for writing and reading search-data.json."""

    def test_artifact_shape(self, tmp_path, make_document):
        doc = make_document(
            "js/s/array-map", ["array", "map"], title="Array map", rank=4.5, tag="JavaScript"
        )
        path = write_index(tmp_path / "public" / "search-data.json", [doc])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {
            "searchIndex": [
                {
                    "id": "js/s/array-map",
                    "title": "Array map",
                    "url": "/js/s/array-map",
                    "tag": "JavaScript",
                    "type": "snippet",
                    "searchTokens": "array;map",
                    "rank": 4.5,
                }
            ]
        }

    def test_read_preserves_documents(self, tmp_path, make_document):
        docs = [
            make_document("b", ["zeta", "alpha"], rank=2.0),
            make_document("a", ["promise"], type=ContentType.COLLECTION, rank=1.0),
        ]
        path = write_index(tmp_path / "search-data.json", docs)

        loaded = read_index(path)
        assert loaded == docs
        assert loaded[0].search_tokens == ("zeta", "alpha")

    def test_parse_dict_payload(self):
        docs = parse_index(
            {
                "searchIndex": [
                    {
                        "id": "x",
                        "url": "/x",
                        "title": "X",
                        "tag": "",
                        "type": "collection",
                        "searchTokens": "one;two",
                        "rank": 3,
                    }
                ]
            }
        )
        assert docs[0].type == ContentType.COLLECTION
        assert docs[0].token_set == frozenset({"one", "two"})
        assert docs[0].rank == 3.0

    def test_parse_entry_without_id(self):
        """Entries carrying only a url get their id from it."""
        docs = parse_index(
            '{"searchIndex": [{"url": "/js/s/array-map", "title": "Array map",'
            ' "tag": "JavaScript", "type": "snippet", "searchTokens": "array;map",'
            ' "rank": 3.5}]}'
        )

        assert docs[0].id == "js/s/array-map"
        assert docs[0].url == "/js/s/array-map"
        assert docs[0].search_tokens == ("array", "map")

    def test_entry_without_id_is_searchable(self):
        docs = parse_index(
            {
                "searchIndex": [
                    {
                        "url": "/js/s/array-map",
                        "title": "Array map",
                        "type": "snippet",
                        "searchTokens": "array;map",
                    }
                ]
            }
        )
        results = QueryEngine(docs).search("array map")
        assert [hit.document.id for hit in results.snippets] == ["js/s/array-map"]

    def test_written_artifact_keeps_id(self, tmp_path):
        docs = parse_index(
            {"searchIndex": [{"url": "/py/s/zip", "title": "Zip", "type": "snippet"}]}
        )
        path = write_index(tmp_path / "search-data.json", docs)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["searchIndex"][0]["id"] == "py/s/zip"

    def test_parse_rejects_wrong_shape(self):
        with pytest.raises(IndexFormatError):
            parse_index({"documents": []})

    def test_parse_rejects_unknown_type(self):
        with pytest.raises(IndexFormatError):
            parse_index(
                '{"searchIndex": [{"id": "x", "url": "/x", "title": "X", "type": "page"}]}'
            )

    def test_parse_rejects_invalid_json(self):
        with pytest.raises(IndexFormatError):
            parse_index("not json")
