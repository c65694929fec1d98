"""In-memory adapter for the key-value store."""

from __future__ import annotations

import copy
import json
from typing import Any

from focustimer_cli.models.exceptions import StorageWriteError
from focustimer_cli.repositories.repository import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store.

    Values are deep-copied on the way in and out so callers can never
    mutate stored records in place, matching the file adapter.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        try:
            json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(f"Value for {key!r} is not JSON-serialisable: {e}") from e
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """Keys currently stored."""
        return list(self._data)
