"""JSON file adapter for the key-value store.

Each key is stored as ``<data_dir>/<key>.json``. Writes go to a temporary
file in the same directory and are moved into place with ``os.replace`` so
a crash mid-write never leaves a truncated record behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from focustimer_cli.models.exceptions import (
    InvalidPersistedShape,
    StorageReadError,
    StorageWriteError,
)
from focustimer_cli.repositories.repository import KeyValueStore


class JsonFileStore(KeyValueStore):
    """Key-value store backed by one JSON file per key."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> Any | None:
        path = self._path(key)
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidPersistedShape(f"Malformed JSON in {path.name}: {e}") from e
        except OSError as e:
            raise StorageReadError(f"Failed to read {path.name}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(value, f, indent=2)
                os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageWriteError(f"Failed to write {path.name}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Failed to remove {path.name}: {e}") from e
