"""Tests for the calculation history store."""

import pytest

from compeff_pro.core.history import HistoryStore, default_history_path


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path / "history.json")


class TestHistoryStore:
    def test_empty(self, store):
        assert store.list() == []
        assert len(store) == 0

    def test_add_and_get(self, store):
        entry = store.add("m2", "R717 • 100.0 kW", {"fluid": "R717"}, {"Cooling capacity": 100.0})
        assert len(entry["id"]) == 12
        assert store.get(entry["id"])["summary"]["Cooling capacity"] == 100.0

    def test_newest_first(self, store):
        first = store.add("m2", "first", {})
        second = store.add("m3", "second", {})
        ids = [e["id"] for e in store.list()]
        assert ids == [second["id"], first["id"]]

    def test_filter_by_mode(self, store):
        store.add("m2", "a", {})
        store.add("m3", "b", {})
        store.add("m2", "c", {})
        assert [e["label"] for e in store.list("m2")] == ["c", "a"]

    def test_max_entries(self, tmp_path):
        store = HistoryStore(tmp_path / "h.json", max_entries=3)
        for i in range(5):
            store.add("m2", f"run {i}", {})
        assert [e["label"] for e in store.list()] == ["run 4", "run 3", "run 2"]

    def test_delete(self, store):
        entry = store.add("m2", "a", {})
        assert store.delete(entry["id"])
        assert not store.delete(entry["id"])
        assert len(store) == 0

    def test_get_missing(self, store):
        with pytest.raises(KeyError):
            store.get("nope")

    def test_clear(self, store):
        store.add("m2", "a", {})
        store.add("m2", "b", {})
        assert store.clear() == 2
        assert store.list() == []

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{not json", encoding="utf-8")
        store = HistoryStore(path)
        assert store.list() == []
        store.add("m2", "fresh", {})
        assert len(store) == 1

    def test_unexpected_content(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('{"id": "x"}', encoding="utf-8")
        assert HistoryStore(path).list() == []


class TestDefaultPath:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COMPEFF_HOME", str(tmp_path))
        assert default_history_path() == tmp_path / "history.json"

    def test_home_fallback(self, monkeypatch):
        monkeypatch.delenv("COMPEFF_HOME", raising=False)
        assert default_history_path().parent.name == ".compeff_pro"
