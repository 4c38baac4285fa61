"""Durable key-value store backed by JSON files."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Interface for the client-side durable cache."""

    def get(self, key: str) -> object | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: object) -> None:
        """Store a JSON-compatible value under a key."""

    def delete(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class JsonFileStore(KeyValueStore):
    """Stores each key as ``<directory>/<key>.json``."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileStore":
        """Create a store rooted at a directory, creating it if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def get(self, key: str) -> object | None:
        """Return the decoded value, or None if missing or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            _logger.warning("Discarding unreadable cache entry: key=%s", key)
            return None

    def set(self, key: str, value: object) -> None:
        """Write the value atomically through a temporary file."""
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(value), encoding="utf-8")
        tmp_path.replace(path)

    def delete(self, key: str) -> None:
        """Remove the file for a key."""
        self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
