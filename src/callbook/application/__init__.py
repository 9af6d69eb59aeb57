"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from callbook.application.contact_directory import ContactDirectory
from callbook.application.contact_service import ContactService
from callbook.application.dto import (
    CallFailed,
    CallPlaced,
    ContactAdded,
    ContactForm,
    ContactNotFound,
    ContactSummary,
    ContactUpdated,
    Rejected,
    RejectReason,
)
from callbook.application.ports import (
    ContactSerializer,
    ContactStore,
    Dialer,
    ImageStore,
)

__all__ = [
    "CallFailed",
    "CallPlaced",
    "ContactAdded",
    "ContactDirectory",
    "ContactForm",
    "ContactNotFound",
    "ContactSerializer",
    "ContactService",
    "ContactStore",
    "ContactSummary",
    "ContactUpdated",
    "Dialer",
    "ImageStore",
    "Rejected",
    "RejectReason",
]
