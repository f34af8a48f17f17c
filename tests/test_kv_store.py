# =============================================================================
# tests/test_kv_store.py - Key-Value Store Tests
# =============================================================================
# InMemoryKVStore is tested directly; SupabaseKVStore is tested against a
# MagicMock Supabase client so no network is needed.
# =============================================================================

import threading
from unittest.mock import MagicMock

import pytest

from lib.kv_store import InMemoryKVStore, KVStoreError, SupabaseKVStore


# =============================================================================
# In-memory store
# =============================================================================

class TestInMemoryKVStore:
    """Tests for the process-local store."""

    def test_get_missing_is_none(self):
        assert InMemoryKVStore().get("market:nope") is None

    def test_set_get_delete(self):
        store = InMemoryKVStore()

        store.set("market:1", {"name": "A"})
        assert store.get("market:1") == {"name": "A"}

        store.delete("market:1")
        assert store.get("market:1") is None

    def test_delete_missing_is_silent(self):
        InMemoryKVStore().delete("market:nope")

    def test_values_are_copied(self):
        """Mutating a returned value does not change what is stored."""
        store = InMemoryKVStore()
        store.set("market:1", {"photos": []})

        value = store.get("market:1")
        value["photos"].append("x.jpg")

        assert store.get("market:1") == {"photos": []}

    def test_get_by_prefix(self):
        store = InMemoryKVStore({
            "market:1": {"id": "1"},
            "market:2": {"id": "2"},
            "vendor:1": {"id": "v1"},
            "marketing:1": {"id": "nope"},
        })

        ids = sorted(doc["id"] for doc in store.get_by_prefix("market:"))

        assert ids == ["1", "2"]

    def test_delete_many(self):
        store = InMemoryKVStore({"a": 1, "b": 2, "c": 3})

        store.delete_many(["a", "c", "missing"])

        assert store.keys() == ["b"]

    def test_mutate_creates_and_updates(self):
        store = InMemoryKVStore()

        store.mutate("counter", lambda current: (current or 0) + 1)
        result = store.mutate("counter", lambda current: (current or 0) + 1)

        assert result == 2
        assert store.get("counter") == 2

    def test_mutate_writes_nothing_when_mutator_raises(self):
        store = InMemoryKVStore({"doc": {"v": 1}})

        def explode(current):
            current["v"] = 99
            raise ValueError("nope")

        with pytest.raises(ValueError):
            store.mutate("doc", explode)

        assert store.get("doc") == {"v": 1}

    def test_concurrent_mutations_are_not_lost(self):
        """Read-modify-write on one key is serialized."""
        store = InMemoryKVStore({"voters": []})

        def add_voter(voter):
            store.mutate("voters", lambda current: current + [voter])

        threads = [threading.Thread(target=add_voter, args=(f"u{i}",)) for i in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(store.get("voters")) == sorted(f"u{i}" for i in range(50))

    def test_ping(self):
        InMemoryKVStore().ping()

    def test_pop_returns_and_removes(self):
        store = InMemoryKVStore({"doc": {"v": 1}})

        assert store.pop("doc") == {"v": 1}
        assert store.get("doc") is None

    def test_pop_keeps_value_when_check_raises(self):
        store = InMemoryKVStore({"doc": {"owner": "a"}})

        def only_owner_b(current):
            if current["owner"] != "b":
                raise PermissionError("not yours")

        with pytest.raises(PermissionError):
            store.pop("doc", only_owner_b)

        assert store.get("doc") == {"owner": "a"}

    def test_pop_waits_for_running_mutation(self):
        """A delete issued mid-mutation runs after it, so the key stays gone."""
        store = InMemoryKVStore({"doc": {"v": 1}})
        deleter = threading.Thread(target=store.pop, args=("doc",))

        def bump(current):
            deleter.start()
            deleter.join(timeout=0.2)
            # Still blocked on the key lock
            assert deleter.is_alive()
            return {"v": current["v"] + 1}

        store.mutate("doc", bump)
        deleter.join(timeout=5)

        assert not deleter.is_alive()
        assert store.get("doc") is None

    def test_key_locks_are_released(self):
        """No lock outlives the operations that used it."""
        store = InMemoryKVStore()

        for i in range(20):
            store.mutate(f"review:{i}", lambda current: {"helpful": 0})
            store.mutate(f"review:{i}", lambda current: {**current, "helpful": 1})
            store.pop(f"review:{i}")

        assert len(store._key_locks) == 0
        assert store.keys() == []

    def test_key_lock_released_when_mutator_raises(self):
        store = InMemoryKVStore()

        def explode(current):
            raise ValueError("nope")

        with pytest.raises(ValueError):
            store.mutate("doc", explode)
        with pytest.raises(ValueError):
            store.pop("doc", explode)

        assert len(store._key_locks) == 0


# =============================================================================
# Supabase store
# =============================================================================

@pytest.fixture
def table():
    """MagicMock standing in for supabase.table(...) query builders."""
    return MagicMock()


@pytest.fixture
def supabase_store(table):
    client = MagicMock()
    client.admin.table.return_value = table
    return SupabaseKVStore(client, table="kv_store")


class TestSupabaseKVStore:
    """Tests for the Supabase-backed store."""

    def test_get_returns_value_column(self, supabase_store, table):
        query = table.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[{"value": {"name": "A"}}])

        assert supabase_store.get("market:1") == {"name": "A"}
        table.select.assert_called_once_with("value")
        table.select.return_value.eq.assert_called_once_with("key", "market:1")

    def test_get_missing(self, supabase_store, table):
        query = table.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[])

        assert supabase_store.get("market:1") is None

    def test_set_upserts(self, supabase_store, table):
        supabase_store.set("market:1", {"name": "A"})

        table.upsert.assert_called_once_with({"key": "market:1", "value": {"name": "A"}})
        table.upsert.return_value.execute.assert_called_once()

    def test_delete(self, supabase_store, table):
        supabase_store.delete("market:1")

        table.delete.return_value.eq.assert_called_once_with("key", "market:1")

    def test_delete_many_uses_one_query(self, supabase_store, table):
        supabase_store.delete_many(["a", "b"])

        table.delete.return_value.in_.assert_called_once_with("key", ["a", "b"])

    def test_delete_many_empty_skips_query(self, supabase_store, table):
        supabase_store.delete_many([])

        table.delete.assert_not_called()

    def test_get_by_prefix(self, supabase_store, table):
        query = table.select.return_value.like.return_value
        query.execute.return_value = MagicMock(data=[
            {"key": "market:1", "value": {"id": "1"}},
            {"key": "market:2", "value": {"id": "2"}},
        ])

        values = supabase_store.get_by_prefix("market:")

        assert values == [{"id": "1"}, {"id": "2"}]
        table.select.return_value.like.assert_called_once_with("key", "market:%")

    def test_errors_are_wrapped(self, supabase_store, table):
        table.upsert.return_value.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(KVStoreError) as exc_info:
            supabase_store.set("market:1", {})

        assert exc_info.value.operation == "set"
        assert exc_info.value.key == "market:1"
