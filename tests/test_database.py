"""Tests for eunoia/core/database.py"""

import json

import pytest

from eunoia.core.database import DatabaseError, JsonStore, TASKS_KEY


class TestJsonStore:
    def test_missing_user_reads_empty(self, store):
        assert store.get("nobody", TASKS_KEY) is None
        assert store.load_collection("nobody", TASKS_KEY) == {}

    def test_set_and_get_persist_to_disk(self, store, temp_data_dir):
        store.set("alice", "data-mode", "user")

        reopened = JsonStore(temp_data_dir)
        assert reopened.get("alice", "data-mode") == "user"
        assert (temp_data_dir / "user_alice.json").exists()
        assert not list(temp_data_dir.glob("*.tmp"))

    def test_users_are_isolated(self, store):
        store.set("alice", TASKS_KEY, {"1": {"title": "A"}})
        assert store.get("bob", TASKS_KEY) is None
        assert store.list_users() == ["alice"]

    def test_delete_keys_reports_removed_count(self, store):
        store.set("alice", "a", 1)
        store.set("alice", "b", 2)

        assert store.delete_keys("alice", ["a", "b", "missing"]) == 2
        assert store.get("alice", "a") is None
        assert store.delete("alice", "a") is False

    def test_corrupt_file_reads_as_empty(self, store, temp_data_dir):
        (temp_data_dir / "user_alice.json").write_text("{not json", encoding="utf-8")

        assert store.get("alice", TASKS_KEY) is None
        assert store.stats.error_count == 1

    def test_malformed_collection_is_treated_as_empty(self, store):
        store.set("alice", TASKS_KEY, ["not", "a", "mapping"])
        assert store.load_collection("alice", TASKS_KEY) == {}

    def test_file_is_plain_json(self, store, temp_data_dir):
        store.save_collection("alice", TASKS_KEY, {"t1": {"title": "Ünïcode"}})
        tree = json.loads((temp_data_dir / "user_alice.json").read_text(encoding="utf-8"))
        assert tree == {TASKS_KEY: {"t1": {"title": "Ünïcode"}}}

    def test_invalid_user_id(self, store):
        with pytest.raises(DatabaseError):
            store.get("../..", TASKS_KEY)

    def test_stats(self, store):
        store.set("alice", "a", 1)
        stats = store.get_stats()
        assert stats["save_count"] == 1
        assert stats["users"] == 1
        assert stats["last_save"] is not None
