"""Custom exceptions for Focus Timer storage."""


class FocusTimerError(Exception):
    """Base exception for all Focus Timer errors."""


class StorageError(FocusTimerError):
    """Raised when the key-value store cannot complete an operation."""


class StorageReadError(StorageError):
    """Raised when a record cannot be read from the store."""


class StorageWriteError(StorageError):
    """Raised when a record cannot be written to or removed from the store."""


class InvalidPersistedShape(StorageReadError):
    """Raised when a stored record is malformed (bad JSON or missing fields)."""
