"""In-memory record storage shared by the registries.

Every store owns its own lock so read-modify-write sequences stay atomic when
Flask serves requests on several threads. Records live for the lifetime of
the process.
"""
import threading


class MemoryStore:
    """Keyed record store: create, get, list and update."""

    def __init__(self):
        self._records = {}
        self._lock = threading.RLock()

    def __len__(self):
        with self._lock:
            return len(self._records)

    def __contains__(self, key):
        with self._lock:
            return key in self._records

    def get(self, key):
        with self._lock:
            return self._records.get(key)

    def insert(self, key, record):
        """Store `record` under `key` unless the key is taken. Returns True on insert."""
        with self._lock:
            if key in self._records:
                return False
            self._records[key] = record
            return True

    def values(self):
        """Snapshot of all records."""
        with self._lock:
            return list(self._records.values())

    def update(self, key, mutate):
        """Apply `mutate(record)` under the lock. Returns the record or None."""
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            mutate(record)
            return record
