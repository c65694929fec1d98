"""Persistence gateway: typed access to the three stored records.

This is the error boundary for storage. Every StorageError raised by the
underlying KeyValueStore is caught here, logged, and converted to a safe
default: reads return "absent"/defaults, failed writes are dropped and the
next natural write overwrites the record. Nothing is retried actively.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from pydantic import ValidationError

from focustimer_cli.models.exceptions import (
    InvalidPersistedShape,
    StorageError,
    StorageReadError,
)
from focustimer_cli.models.focus.history import PomodoroSession
from focustimer_cli.models.focus.settings import TimerSettings
from focustimer_cli.models.focus.state import ActiveSessionSnapshot
from focustimer_cli.repositories.repository import (
    ACTIVE_SESSION_KEY,
    HISTORY_KEY,
    SETTINGS_KEY,
    KeyValueStore,
)
from focustimer_cli.utils.background import InlineWriter
from focustimer_cli.utils.logger import get_child_logger

ErrorSink = Callable[[str, Exception], None]


class Writer(Protocol):
    def submit(self, job: Callable[[], None], description: str = "write") -> None: ...

    def drain(self) -> None: ...

    def close(self) -> None: ...


class PersistenceGateway:
    """Reads and writes history, the active snapshot and timer settings."""

    def __init__(
        self,
        store: KeyValueStore,
        writer: Writer | None = None,
        error_sink: ErrorSink | None = None,
    ):
        self._store = store
        self._writer = writer or InlineWriter()
        self._error_sink = error_sink
        self.failure_count = 0

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def _report(self, operation: str, error: Exception) -> None:
        self.failure_count += 1
        get_child_logger("storage").warning("%s failed: %s", operation, error)
        if self._error_sink:
            self._error_sink(operation, error)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_settings(self) -> TimerSettings:
        """Stored settings, or defaults if absent or unreadable."""
        self._writer.drain()
        try:
            data = self._store.get(SETTINGS_KEY)
            if data is None:
                return TimerSettings()
            return TimerSettings.model_validate(data)
        except ValidationError as e:
            self._report("load settings", InvalidPersistedShape(str(e)))
        except StorageError as e:
            self._report("load settings", e)
        return TimerSettings()

    def load_snapshot(self) -> ActiveSessionSnapshot | None:
        """The in-flight snapshot, or None if absent, unreadable or malformed."""
        self._writer.drain()
        try:
            data = self._store.get(ACTIVE_SESSION_KEY)
            if data is None:
                return None
            return ActiveSessionSnapshot.from_dict(data)
        except StorageError as e:
            self._report("load snapshot", e)
            return None

    def load_history(self) -> list[PomodoroSession]:
        """All readable sessions in append order; malformed entries are skipped."""
        self._writer.drain()
        try:
            raw = self._read_history()
        except StorageError as e:
            self._report("load history", e)
            return []

        sessions = []
        for entry in raw:
            try:
                sessions.append(PomodoroSession.from_dict(entry))
            except InvalidPersistedShape as e:
                self._report("load history entry", e)
        return sessions

    def _read_history(self) -> list:
        raw = self._store.get(HISTORY_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise InvalidPersistedShape("History record is not a list")
        return raw

    # ------------------------------------------------------------------
    # Writes (dispatched through the writer, never awaited)
    # ------------------------------------------------------------------

    def _dispatch(self, operation: str, job: Callable[[], None]) -> None:
        def guarded() -> None:
            try:
                job()
            except StorageError as e:
                self._report(operation, e)

        self._writer.submit(guarded, operation)

    def save_settings(self, settings: TimerSettings) -> None:
        data = settings.model_dump()
        self._dispatch("save settings", lambda: self._store.set(SETTINGS_KEY, data))

    def initialize_settings(self) -> TimerSettings:
        """Write default settings on first launch; returns the effective settings."""
        self._writer.drain()
        try:
            if self._store.get(SETTINGS_KEY) is None:
                defaults = TimerSettings()
                self.save_settings(defaults)
                return defaults
        except StorageReadError as e:
            self._report("initialize settings", e)
            return TimerSettings()
        return self.load_settings()

    def save_snapshot(self, snapshot: ActiveSessionSnapshot) -> None:
        data = snapshot.to_dict()
        self._dispatch(
            "save snapshot", lambda: self._store.set(ACTIVE_SESSION_KEY, data)
        )

    def clear_snapshot(self) -> None:
        self._dispatch("clear snapshot", lambda: self._store.remove(ACTIVE_SESSION_KEY))

    def append_session(self, session: PomodoroSession) -> None:
        """Append to history.

        If the existing history cannot be read the record is dropped rather
        than overwriting the unreadable history with a one-item list.
        """
        data = session.to_dict()

        def append() -> None:
            raw = self._read_history()
            raw.append(data)
            self._store.set(HISTORY_KEY, raw)

        self._dispatch("append session", append)

    def flush(self) -> None:
        """Wait for queued writes."""
        self._writer.drain()

    def close(self) -> None:
        """Flush queued writes and release the writer."""
        self._writer.close()


def create_gateway(background: bool = False) -> PersistenceGateway:
    """Gateway over the configured data directory.

    ``background=True`` dispatches writes to a worker thread; callers must
    ``close()`` the gateway to flush them.
    """
    from focustimer_cli.adapters.json_store import JsonFileStore
    from focustimer_cli.services.config_service import get_config_service
    from focustimer_cli.utils.background import BackgroundWriter

    store = JsonFileStore(get_config_service().data_dir)
    writer = BackgroundWriter() if background else InlineWriter()
    return PersistenceGateway(store, writer)
