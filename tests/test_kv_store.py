"""
Key-Value Store Tests - In-memory and JSON File Stores
"""
import json

import pytest

from nburate.adapters.persistence.kv_store import InMemoryStore, JsonFileStore


@pytest.fixture(params=["memory", "file"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryStore()
    return JsonFileStore(tmp_path / "store.json")


class TestStoreContract:
    def test_get_missing(self, any_store):
        assert any_store.get("missing") is None

    def test_put_get_delete(self, any_store):
        any_store.put("a", "1")
        assert any_store.get("a") == "1"
        assert any_store.delete("a") is True
        assert any_store.get("a") is None
        assert any_store.delete("a") is False

    def test_scan_prefix_sorted(self, any_store):
        for key in ["p_2", "p_1", "q_1"]:
            any_store.put(key, "v")
        assert any_store.scan_prefix("p_") == ["p_1", "p_2"]


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).put("k", "v")
        assert JsonFileStore(path).get("k") == "v"

    def test_file_is_json_object(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileStore(path).put("k", "v")
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "absent.json")
        assert store.scan_prefix("") == []
        assert not (tmp_path / "absent.json").exists()

    def test_corrupt_file_backed_up_and_treated_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileStore(path)
        assert store.get("k") is None
        assert (tmp_path / "store.json.corrupt").read_text(encoding="utf-8") == "{broken"

        store.put("k", "v")
        assert JsonFileStore(path).get("k") == "v"

    def test_non_object_file_treated_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileStore(path).scan_prefix("") == []

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileStore(tmp_path / "store.json")
        store.put("a", "1")
        store.delete("a")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]
