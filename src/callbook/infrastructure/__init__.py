"""Infrastructure layer: concrete implementations of application ports."""

from callbook.infrastructure.backends import (
    FileBackend,
    InMemoryBackend,
    KeyValueBackend,
    StorageBackend,
)
from callbook.infrastructure.backup_chain import BackupChain
from callbook.infrastructure.dialer import CommandDialer
from callbook.infrastructure.factory import (
    build_backup_chain,
    build_contact_directory,
    build_contact_service,
)
from callbook.infrastructure.images import ImageSidecar
from callbook.infrastructure.memory_store import InMemoryContactStore
from callbook.infrastructure.phone import normalize_phone, tel_uri
from callbook.infrastructure.serialization import JsonContactSerializer
from callbook.infrastructure.settings import Settings

__all__ = [
    "BackupChain",
    "CommandDialer",
    "FileBackend",
    "ImageSidecar",
    "InMemoryBackend",
    "InMemoryContactStore",
    "JsonContactSerializer",
    "KeyValueBackend",
    "Settings",
    "StorageBackend",
    "build_backup_chain",
    "build_contact_directory",
    "build_contact_service",
    "normalize_phone",
    "tel_uri",
]
