"""Storage backends: where a serialized contact list can live.

All backends share one shape (name, read, write) and never raise on I/O:
read() gives None for missing/unreadable/blank content, write() gives False.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    name: str

    def read(self) -> str | None:
        ...

    def write(self, payload: str) -> bool:
        ...


def atomic_write_text(path: Path, text: str) -> None:
    """Write text next to path, then replace path with it. Raises OSError."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        Path(tmp_name).replace(path)
    finally:
        Path(tmp_name).unlink(missing_ok=True)


class FileBackend:
    """One JSON file holding the whole list (primary store or shared backup)."""

    def __init__(self, path: Path, name: str = "file") -> None:
        self.path = Path(path)
        self.name = name

    def read(self) -> str | None:
        try:
            if not self.path.exists():
                return None
            text = self.path.read_text(encoding="utf-8")
        except (OSError, ValueError):
            logger.warning("Reading %s backend at %s failed", self.name, self.path, exc_info=True)
            return None
        return text if text.strip() else None

    def write(self, payload: str) -> bool:
        try:
            atomic_write_text(self.path, payload)
        except OSError:
            logger.error("Writing %s backend at %s failed", self.name, self.path, exc_info=True)
            return False
        return True

    def __repr__(self) -> str:
        return f"FileBackend(name={self.name!r}, path={str(self.path)!r})"


class KeyValueBackend:
    """A preferences file (JSON object) where the list is one string value under a key."""

    def __init__(self, path: Path, key: str = "contacts_json", name: str = "preferences") -> None:
        self.path = Path(path)
        self.key = key
        self.name = name

    def _read_values(self) -> dict:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def read(self) -> str | None:
        try:
            value = self._read_values().get(self.key)
        except (OSError, ValueError):
            logger.warning("Reading %s backend at %s failed", self.name, self.path, exc_info=True)
            return None
        if not isinstance(value, str) or not value.strip():
            return None
        return value

    def write(self, payload: str) -> bool:
        try:
            values = self._read_values()
        except (OSError, ValueError):
            # Unreadable preferences are replaced, not merged.
            values = {}
        values[self.key] = payload
        try:
            atomic_write_text(self.path, json.dumps(values, ensure_ascii=False, indent=2) + "\n")
        except OSError:
            logger.error("Writing %s backend at %s failed", self.name, self.path, exc_info=True)
            return False
        return True

    def __repr__(self) -> str:
        return f"KeyValueBackend(name={self.name!r}, path={str(self.path)!r}, key={self.key!r})"


class InMemoryBackend:
    """Holds the payload in memory (no disk). Used in tests and ephemeral runs."""

    def __init__(self, name: str = "memory", payload: str | None = None) -> None:
        self.name = name
        self.payload = payload
        self.writes = 0

    def read(self) -> str | None:
        if self.payload is None or not self.payload.strip():
            return None
        return self.payload

    def write(self, payload: str) -> bool:
        self.payload = payload
        self.writes += 1
        return True
