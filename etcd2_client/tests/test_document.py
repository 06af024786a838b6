"""Tests for the Document wrapper."""

import pytest

from etcd2_client import Document, DocumentTypeError

NODE = {
    "key": "/dir",
    "dir": True,
    "nodes": [
        {"key": "/dir/a", "value": "1", "modifiedIndex": 4, "createdIndex": 4},
        {"key": "/dir/b", "value": "2", "modifiedIndex": 5, "createdIndex": 5},
    ],
    "modifiedIndex": 3,
    "createdIndex": 3,
}


class TestDocumentAccess:
    def test_nested_item_access(self):
        doc = Document(NODE)
        assert doc["nodes"][0]["value"].as_str() == "1"
        assert doc["modifiedIndex"].as_int() == 3
        assert doc["dir"].as_bool() is True

    def test_kind(self):
        assert Document(None).kind == "null"
        assert Document(True).kind == "bool"
        assert Document(1.5).kind == "number"
        assert Document("x").kind == "string"
        assert Document([]).kind == "array"
        assert Document({}).kind == "object"

    def test_typed_accessor_mismatch(self):
        doc = Document(NODE)
        with pytest.raises(DocumentTypeError):
            doc["key"].as_int()
        with pytest.raises(DocumentTypeError):
            doc["dir"].as_int()
        with pytest.raises(DocumentTypeError):
            doc.as_list()
        with pytest.raises(DocumentTypeError):
            doc["key"]["x"]

    def test_missing_key(self):
        with pytest.raises(KeyError):
            Document(NODE)["value"]

    def test_get_with_default(self):
        doc = Document({"key": "/empty", "dir": True})
        assert doc.get("nodes").is_null()
        assert doc.get("nodes", []) == []

    def test_has_key(self):
        doc = Document(NODE)
        assert doc.has_key("nodes")
        assert not doc.has_key("value")
        assert "nodes" in doc


class TestDocumentIteration:
    def test_iterate_array_yields_documents(self):
        keys = [child["key"].as_str() for child in Document(NODE)["nodes"]]
        assert keys == ["/dir/a", "/dir/b"]

    def test_iterate_null_is_empty(self):
        """An omitted children list behaves like zero children."""
        node = Document({"key": "/empty", "dir": True})
        assert list(node.get("nodes")) == []
        assert len(node.get("nodes")) == 0

    def test_iterate_object_yields_keys(self):
        assert sorted(Document({"a": 1, "b": 2})) == ["a", "b"]

    def test_scalar_not_iterable(self):
        with pytest.raises(DocumentTypeError):
            iter(Document(5))

    def test_membership_in_array(self):
        urls = Document(["http://a:2380", "http://b:2380"])
        assert "http://a:2380" in urls
        assert "http://c:2380" not in urls


class TestDocumentValueSemantics:
    def test_equality(self):
        assert Document({"a": [1]}) == {"a": [1]}
        assert Document({"a": [1]}) == Document({"a": [1]})
        assert Document("x") != "y"

    def test_wrapping_a_document_unwraps(self):
        assert Document(Document(3)).raw == 3

    def test_truthiness(self):
        assert not Document(None)
        assert not Document({})
        assert Document({"a": 1})

    def test_from_json(self):
        assert Document.from_json('{"a": null}') == {"a": None}
        with pytest.raises(ValueError):
            Document.from_json("{not json")

    def test_to_json(self):
        assert Document({"a": 1}).to_json() == '{"a": 1}'
