"""Settings read from the environment (load .env first in entry points)."""

import os
import shlex
from dataclasses import dataclass
from pathlib import Path

from callbook.domain import DEFAULT_MAX_CONTACTS

CONTACTS_FILE = "contacts.json"
IMAGES_FOLDER = "contact_images"
BACKUP_FILE = "contacts_backup.json"
PREFS_FILE = "contact_backup.json"


def _env(name: str) -> str:
    return (os.environ.get(name) or "").strip()


def _xdg_dir(variable: str, fallback: str) -> Path:
    return Path(os.path.expanduser(_env(variable) or fallback)).resolve()


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    prefs_path: Path
    backup_dir: Path
    max_contacts: int = DEFAULT_MAX_CONTACTS
    phone_region: str | None = None
    dial_command: tuple[str, ...] = ("xdg-open",)

    @property
    def contacts_path(self) -> Path:
        return self.data_dir / CONTACTS_FILE

    @property
    def images_dir(self) -> Path:
        return self.data_dir / IMAGES_FOLDER

    @property
    def backup_path(self) -> Path:
        return self.backup_dir / BACKUP_FILE

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from CALLBOOK_* variables, falling back to XDG locations."""
        data_dir = _env("CALLBOOK_DATA_DIR")
        prefs_path = _env("CALLBOOK_PREFS_PATH")
        backup_dir = _env("CALLBOOK_BACKUP_DIR")

        raw_max = _env("CALLBOOK_MAX_CONTACTS")
        max_contacts = DEFAULT_MAX_CONTACTS
        if raw_max:
            try:
                max_contacts = int(raw_max)
            except ValueError as e:
                raise ValueError(f"CALLBOOK_MAX_CONTACTS must be an integer, got {raw_max!r}") from e
        if max_contacts < 1:
            raise ValueError("CALLBOOK_MAX_CONTACTS must be at least 1.")

        dial_command = tuple(shlex.split(_env("CALLBOOK_DIAL_COMMAND"))) or ("xdg-open",)

        return cls(
            data_dir=(
                Path(os.path.expanduser(data_dir)).resolve()
                if data_dir
                else _xdg_dir("XDG_DATA_HOME", "~/.local/share") / "callbook"
            ),
            prefs_path=(
                Path(os.path.expanduser(prefs_path)).resolve()
                if prefs_path
                else _xdg_dir("XDG_CONFIG_HOME", "~/.config") / "callbook" / PREFS_FILE
            ),
            backup_dir=(
                Path(os.path.expanduser(backup_dir)).resolve()
                if backup_dir
                else Path.home() / "Downloads" / "CallBook"
            ),
            max_contacts=max_contacts,
            phone_region=_env("CALLBOOK_PHONE_REGION").upper() or None,
            dial_command=dial_command,
        )
