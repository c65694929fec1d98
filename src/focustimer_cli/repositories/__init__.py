"""Repository interfaces for the Focus Timer CLI.

This package contains the abstract key-value store contract (the "Port")
that storage adapters implement.
"""

from .repository import (
    ACTIVE_SESSION_KEY,
    HISTORY_KEY,
    SETTINGS_KEY,
    KeyValueStore,
)

__all__ = [
    "KeyValueStore",
    "HISTORY_KEY",
    "ACTIVE_SESSION_KEY",
    "SETTINGS_KEY",
]
