"""Wiring: build the directory and service from Settings."""

from functools import partial

from callbook.application import ContactDirectory, ContactService
from callbook.infrastructure.backends import FileBackend, KeyValueBackend
from callbook.infrastructure.backup_chain import BackupChain
from callbook.infrastructure.dialer import CommandDialer
from callbook.infrastructure.images import ImageSidecar
from callbook.infrastructure.phone import normalize_phone
from callbook.infrastructure.serialization import JsonContactSerializer
from callbook.infrastructure.settings import Settings


def build_backup_chain(settings: Settings) -> BackupChain:
    """Primary file, then the preferences file, then the shared backup file."""
    return BackupChain(
        primary=FileBackend(settings.contacts_path, name="primary"),
        serializer=JsonContactSerializer(),
        secondaries=(
            KeyValueBackend(settings.prefs_path, name="preferences"),
            FileBackend(settings.backup_path, name="shared"),
        ),
    )


def build_contact_directory(settings: Settings) -> ContactDirectory:
    return ContactDirectory(
        build_backup_chain(settings),
        JsonContactSerializer(),
        images=ImageSidecar(settings.images_dir),
        max_contacts=settings.max_contacts,
    )


def build_contact_service(settings: Settings | None = None) -> ContactService:
    settings = settings or Settings.from_env()
    return ContactService(
        build_contact_directory(settings),
        dialer=CommandDialer(settings.dial_command, default_region=settings.phone_region),
        normalize_phone=partial(normalize_phone, default_region=settings.phone_region),
    )
