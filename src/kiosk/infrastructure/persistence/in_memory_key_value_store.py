"""Process-local KeyValueStore for development and tests."""

from __future__ import annotations

import threading

from kiosk.domain.repository.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
