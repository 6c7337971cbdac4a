"""Abstract key-value binding used by the key-value order repository."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """A string-keyed store whose single calls are atomic."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or None."""

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
