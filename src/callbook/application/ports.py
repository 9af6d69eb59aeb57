"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Sequence
from typing import Protocol

from callbook.domain import Contact


class ContactStore(Protocol):
    """Durable home of the whole contact list. Never raises on I/O."""

    def load(self) -> list[Contact]:
        """Return the stored list, or [] when missing, unreadable or malformed."""
        ...

    def save(self, contacts: Sequence[Contact]) -> bool:
        """Replace the stored list. Returns False if the primary write failed."""
        ...


class ContactSerializer(Protocol):
    """Whole-list codec shared by the store, backups and export/import."""

    def dumps(self, contacts: Sequence[Contact]) -> str:
        ...

    def loads(self, payload: str) -> list[Contact]:
        """Parse a payload. Raises ValueError if it is malformed."""
        ...


class ImageStore(Protocol):
    """Keeps app-owned copies of contact photos, keyed by contact id."""

    def resolve(self, reference: str | None, contact_id: int) -> str | None:
        """Return a local path for the reference, or the reference unchanged on failure."""
        ...

    def delete(self, contact_id: int) -> bool:
        """Remove the contact's copy if any. Returns False only on failure."""
        ...


class Dialer(Protocol):
    """Hands a phone number to the platform call UI."""

    def dial(self, phone_number: str) -> bool:
        """Returns False if the call could not be started. Never raises."""
        ...
