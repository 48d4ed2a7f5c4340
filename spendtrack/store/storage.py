"""Key-value storage backends.

A KeyValueStorage holds string values under string keys, the same contract as
browser local storage. FileStorage keeps every entry in a single JSON object
file; MemoryStorage keeps them in a dict.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_storage_path() -> Path:
    """Get the default storage file path (XDG compliant)."""
    return get_xdg_data_home() / "spendtrack" / "storage.json"


class KeyValueStorage(ABC):
    """Abstract string key-value storage."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Get the value stored under key, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""


class MemoryStorage(KeyValueStorage):
    """In-process storage; contents are lost when the object goes away."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self.entries: dict[str, str] = dict(entries or {})

    def get_item(self, key: str) -> str | None:
        return self.entries.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.entries[key] = value

    def remove_item(self, key: str) -> None:
        self.entries.pop(key, None)


class FileStorage(KeyValueStorage):
    """Storage backed by one JSON object file mapping keys to string values.

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers never see a half-written file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else get_storage_path()

    def exists(self) -> bool:
        """Check if the storage file exists."""
        return self.path.exists()

    def _read_entries(self) -> dict[str, str]:
        """Read all entries.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not a JSON object.
        """
        if not self.path.exists():
            return {}

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not contain a JSON object")
        return data

    def _write_entries(self, entries: dict[str, str]) -> None:
        """Atomically replace the storage file.

        Raises:
            OSError: If writing or renaming fails.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entries, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _entries_for_update(self) -> dict[str, str]:
        try:
            return self._read_entries()
        except ValueError as e:
            logger.warning("storage_file_unreadable", path=str(self.path), error=str(e))
            return {}

    def get_item(self, key: str) -> str | None:
        value = self._read_entries().get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Storage entry '{key}' is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        entries = self._entries_for_update()
        entries[key] = value
        self._write_entries(entries)

    def remove_item(self, key: str) -> None:
        entries = self._entries_for_update()
        if key in entries:
            del entries[key]
            self._write_entries(entries)

    def initialize(self) -> None:
        """Create an empty storage file, replacing any existing one."""
        self._write_entries({})
