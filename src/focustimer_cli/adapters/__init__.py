"""Storage adapters implementing the key-value store port."""

from .json_store import JsonFileStore
from .memory import InMemoryStore

__all__ = ["JsonFileStore", "InMemoryStore"]
