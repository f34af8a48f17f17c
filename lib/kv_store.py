# =============================================================================
# lib/kv_store.py - Namespaced Key-Value Store
# =============================================================================
# A flat JSON document store addressed by string keys of the form
# "<entity-type>:<id>". Every backend provides:
# - get / set / delete / delete_many
# - get_by_prefix: all values whose key starts with a prefix (unordered)
# - mutate: atomic read-modify-write of one key
# - pop: atomic checked delete of one key
#
# Backends:
# - InMemoryKVStore: process-local dict, used for development and tests
# - SupabaseKVStore: a two-column table (key text primary key, value jsonb)
#
# mutate() and pop() are serialized per key by a lock held in the store.
# For the Supabase backend that lock only covers one server process;
# concurrent writers in other processes still race with last-write-wins.
#
# Usage:
#   store = InMemoryKVStore()
#   store.set("market:123", {"name": "Central"})
#   store.mutate("favorites:u1", lambda doc: {**(doc or {}), "markets": []})
# =============================================================================

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

Mutator = Callable[[Any], Any]
Checker = Callable[[Any], None]


class KVStoreError(Exception):
    """
    Error during a key-value store operation.

    Carries the failing operation and key so logs point at the exact call.
    """

    def __init__(self, message: str, operation: str, key: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.key = key

    def __str__(self) -> str:
        where = f" ({self.key})" if self.key else ""
        return f"[KV_{self.operation.upper()}_FAILED] {self.message}{where}"


class KeyLocks:
    """
    Registry of one lock per key.

    Lets unrelated keys be mutated in parallel while writes to the same key
    are serialized. A key's lock lives only while someone holds or waits
    for it, so the registry does not grow with the number of keys.
    """

    def __init__(self) -> None:
        # key -> [lock, number of holders and waiters]
        self._locks: dict[str, list] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


class KVStore(ABC):
    """Interface shared by all key-value store backends."""

    def __init__(self) -> None:
        self._key_locks = KeyLocks()

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under key, or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Create or replace the value under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is a no-op."""

    @abstractmethod
    def get_by_prefix(self, prefix: str) -> list[Any]:
        """Return every value whose key starts with prefix, in no particular order."""

    def delete_many(self, keys: list[str]) -> None:
        for key in keys:
            self.delete(key)

    def mutate(self, key: str, mutator: Mutator) -> Any:
        """
        Atomically read, transform and write one key.

        The mutator receives the current value (None if absent) and returns
        the value to persist. If the mutator raises, nothing is written and
        the exception propagates to the caller.

        Returns:
            The value that was persisted
        """
        with self._key_locks.hold(key):
            updated = mutator(self.get(key))
            self.set(key, updated)
            return updated

    def pop(self, key: str, check: Checker | None = None) -> Any:
        """
        Atomically read and delete one key.

        Holds the same per-key lock as mutate(), so a delete never interleaves
        with a read-modify-write of that key. check, if given, receives the
        current value (None if absent) and can veto the delete by raising.

        Returns:
            The value that was removed
        """
        with self._key_locks.hold(key):
            current = self.get(key)
            if check is not None:
                check(current)
            self.delete(key)
            return current

    def ping(self) -> None:
        """Raise if the backend is unreachable."""
        self.get("__ping__")


class InMemoryKVStore(KVStore):
    """
    Process-local store.

    Values are deep-copied on the way in and out so callers can freely
    modify returned documents without touching stored state.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        super().__init__()
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._data_lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._data_lock:
            return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._data_lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        with self._data_lock:
            self._data.pop(key, None)

    def get_by_prefix(self, prefix: str) -> list[Any]:
        with self._data_lock:
            return [
                copy.deepcopy(value)
                for key, value in self._data.items()
                if key.startswith(prefix)
            ]

    def keys(self) -> list[str]:
        with self._data_lock:
            return list(self._data)


class SupabaseKVStore(KVStore):
    """
    Store backed by a Supabase (PostgREST) table.

    Expected schema:
        create table kv_store (
            key text primary key,
            value jsonb not null
        );
    """

    def __init__(self, supabase: SupabaseClient, table: str = "kv_store") -> None:
        super().__init__()
        self._supabase = supabase
        self._table = table

    def _query(self):
        return self._supabase.admin.table(self._table)

    def get(self, key: str) -> Any | None:
        try:
            response = (
                self._query()
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"KV get failed for {key}: {e}")
            raise KVStoreError(f"Failed to read key: {e}", operation="get", key=key)

        rows = response.data or []
        return rows[0].get("value") if rows else None

    def set(self, key: str, value: Any) -> None:
        try:
            self._query().upsert({"key": key, "value": value}).execute()
        except Exception as e:
            logger.error(f"KV set failed for {key}: {e}")
            raise KVStoreError(f"Failed to write key: {e}", operation="set", key=key)

    def delete(self, key: str) -> None:
        try:
            self._query().delete().eq("key", key).execute()
        except Exception as e:
            logger.error(f"KV delete failed for {key}: {e}")
            raise KVStoreError(f"Failed to delete key: {e}", operation="delete", key=key)

    def delete_many(self, keys: list[str]) -> None:
        if not keys:
            return
        try:
            self._query().delete().in_("key", keys).execute()
        except Exception as e:
            logger.error(f"KV delete_many failed for {len(keys)} keys: {e}")
            raise KVStoreError(f"Failed to delete keys: {e}", operation="delete_many")

    def get_by_prefix(self, prefix: str) -> list[Any]:
        try:
            response = (
                self._query()
                .select("key, value")
                .like("key", f"{prefix}%")
                .execute()
            )
        except Exception as e:
            logger.error(f"KV prefix scan failed for {prefix}: {e}")
            raise KVStoreError(f"Failed to scan prefix: {e}", operation="scan", key=prefix)

        return [row.get("value") for row in response.data or []]
