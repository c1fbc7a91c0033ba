"""
Tests for the document store backends.
"""

import json

import pytest


class TestInMemoryDocumentStore:
    """Tests for InMemoryDocumentStore."""

    def test_missing_scope_returns_default(self):
        from stylematch.store import InMemoryDocumentStore

        store = InMemoryDocumentStore()

        assert store.get("products") is None
        assert store.get("products", default=[]) == []

    def test_put_then_get(self):
        from stylematch.store import InMemoryDocumentStore

        store = InMemoryDocumentStore()
        store.put("pins/b1", [{"pinId": "1"}])

        assert store.get("pins/b1") == [{"pinId": "1"}]
        assert store.writes == {"pins/b1": 1}

    def test_documents_are_copied(self):
        from stylematch.store import InMemoryDocumentStore

        document = {"items": [1, 2]}
        store = InMemoryDocumentStore({"x": document})
        document["items"].append(3)

        fetched = store.get("x")
        fetched["items"].append(4)

        assert store.get("x") == {"items": [1, 2]}

    def test_location(self):
        from stylematch.store import InMemoryDocumentStore

        assert InMemoryDocumentStore().location("pins/b1") == "memory://pins/b1"


class TestJsonFileDocumentStore:
    """Tests for JsonFileDocumentStore."""

    def test_path_layout(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        store = JsonFileDocumentStore(tmp_path)

        assert store.path_for("products") == tmp_path / "products.json"
        assert store.path_for("embeddings/pin") == tmp_path / "embeddings" / "pin.json"
        assert store.path_for("pins/123") == tmp_path / "pins" / "123.json"

    def test_board_ids_are_escaped(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        store = JsonFileDocumentStore(tmp_path)
        path = store.path_for("pins/a b:c")

        assert path.parent == tmp_path / "pins"
        assert path.name == "a%20b%3Ac.json"

    def test_dot_segments_stay_under_root(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        store = JsonFileDocumentStore(tmp_path)

        assert store.path_for("pins/..") == tmp_path / "pins" / "%2E%2E.json"
        assert store.path_for("../products").parent == tmp_path / "%2E%2E"

    def test_empty_scope_rejected(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        with pytest.raises(ValueError):
            JsonFileDocumentStore(tmp_path).path_for("")

    def test_round_trip_writes_pretty_json(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        store = JsonFileDocumentStore(tmp_path)
        store.put("embeddings/pin", {"model": "m", "items": []})

        path = tmp_path / "embeddings" / "pin.json"
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"model": "m", "items": []}
        assert "\n  " in path.read_text(encoding="utf-8")
        assert store.get("embeddings/pin") == {"model": "m", "items": []}

    def test_put_replaces_whole_document(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        store = JsonFileDocumentStore(tmp_path)
        store.put("pins/b1", [{"pinId": "1"}, {"pinId": "2"}])
        store.put("pins/b1", [{"pinId": "3"}])

        assert store.get("pins/b1") == [{"pinId": "3"}]

    def test_no_temp_files_left_behind(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        store = JsonFileDocumentStore(tmp_path)
        store.put("products", [])

        assert [p.name for p in tmp_path.iterdir()] == ["products.json"]

    def test_missing_file_returns_default(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        assert JsonFileDocumentStore(tmp_path).get("products", default=[]) == []

    def test_corrupt_file_returns_default(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        (tmp_path / "products.json").write_text("{not json", encoding="utf-8")

        assert JsonFileDocumentStore(tmp_path).get("products", default=[]) == []

    def test_location_is_file_path(self, tmp_path):
        from stylematch.store import JsonFileDocumentStore

        store = JsonFileDocumentStore(tmp_path)

        assert store.location("pins/b1") == str(tmp_path / "pins" / "b1.json")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
