"""Repository abstraction layer for Focus Timer CLI.

Defines the key-value store port the persistence gateway is built on,
following the hexagonal architecture (Ports & Adapters) pattern.

Adapters live in:
- focustimer_cli.adapters.json_store (one JSON file per key)
- focustimer_cli.adapters.memory (in-process dictionary)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# Keys of the three persisted records
HISTORY_KEY = "history"
ACTIVE_SESSION_KEY = "active_session"
SETTINGS_KEY = "settings"


class KeyValueStore(ABC):
    """Abstract base class for raw record persistence.

    Values are JSON-compatible Python objects. Every ``set`` is a full
    overwrite of the record, never a partial update.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Read a record.

        Args:
            key: Record key

        Returns:
            The stored value, or None if the key is absent

        Raises:
            StorageReadError: If the store cannot be read
            InvalidPersistedShape: If the stored bytes are not valid JSON
        """
        raise NotImplementedError("KeyValueStore.get() must be implemented by adapter")

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Write (overwrite) a record.

        Raises:
            StorageWriteError: If the record cannot be written
        """
        raise NotImplementedError("KeyValueStore.set() must be implemented by adapter")

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a record. Removing an absent key is not an error.

        Raises:
            StorageWriteError: If the record cannot be removed
        """
        raise NotImplementedError(
            "KeyValueStore.remove() must be implemented by adapter"
        )
