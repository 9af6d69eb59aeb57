"""
CallBook core: clean-architecture layout.

- domain: Contact entity and limits. No outer dependencies.
- application: ContactDirectory (repository), ContactService use cases, ports, DTOs.
- infrastructure: adapters (storage backends, BackupChain, ImageSidecar, dialer, settings).
"""

from callbook.application import (
    CallFailed,
    CallPlaced,
    ContactAdded,
    ContactDirectory,
    ContactForm,
    ContactNotFound,
    ContactService,
    ContactStore,
    ContactSummary,
    ContactUpdated,
    Rejected,
    RejectReason,
)
from callbook.domain import Contact
from callbook.infrastructure import (
    BackupChain,
    ImageSidecar,
    InMemoryContactStore,
    JsonContactSerializer,
    Settings,
    build_contact_service,
)

__all__ = [
    "BackupChain",
    "CallFailed",
    "CallPlaced",
    "Contact",
    "ContactAdded",
    "ContactDirectory",
    "ContactForm",
    "ContactNotFound",
    "ContactService",
    "ContactStore",
    "ContactSummary",
    "ContactUpdated",
    "ImageSidecar",
    "InMemoryContactStore",
    "JsonContactSerializer",
    "Rejected",
    "RejectReason",
    "Settings",
    "build_contact_service",
]
