"""Contact use cases: form validation, listing, calling, export and import."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import IO

from callbook.application.contact_directory import ContactDirectory
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
from callbook.application.ports import Dialer
from callbook.domain import Contact


def _summary(contact: Contact) -> ContactSummary:
    return ContactSummary(
        contact_id=contact.id,
        nickname=contact.nickname,
        phone_number=contact.phone_number,
        image_uri=contact.image_uri,
        is_priority=contact.is_priority,
        created_at=datetime.fromtimestamp(contact.created_at / 1000, tz=timezone.utc),
    )


class ContactService:
    """What the screens do: validate a form, hand it to the directory, list and dial."""

    def __init__(
        self,
        directory: ContactDirectory,
        *,
        dialer: Dialer | None = None,
        normalize_phone: Callable[[str], str | None] | None = None,
    ) -> None:
        self._directory = directory
        self._dialer = dialer
        self._normalize_phone = normalize_phone

    @property
    def directory(self) -> ContactDirectory:
        return self._directory

    def _clean(self, form: ContactForm) -> tuple[str, str, str | None] | Rejected:
        nickname = (form.nickname or "").strip()
        if not nickname:
            return Rejected(reason=RejectReason.EMPTY_NICKNAME)
        phone = (form.phone_number or "").strip()
        if not phone:
            return Rejected(reason=RejectReason.EMPTY_PHONE_NUMBER)
        if self._normalize_phone:
            phone = self._normalize_phone(phone) or phone
        image_uri = (form.image_uri or "").strip() or None
        return nickname, phone, image_uri

    def add_contact(self, form: ContactForm) -> ContactAdded | Rejected:
        """Validate the form and add a new contact. Returns added or rejected with a reason."""
        cleaned = self._clean(form)
        if isinstance(cleaned, Rejected):
            return cleaned
        nickname, phone, image_uri = cleaned
        contact = Contact(
            nickname=nickname,
            phone_number=phone,
            image_uri=image_uri,
            is_priority=form.is_priority,
        )
        return self._directory.add(contact)

    def update_contact(
        self, contact_id: int, form: ContactForm
    ) -> ContactUpdated | Rejected | ContactNotFound:
        """Replace an existing contact's editable fields."""
        existing = self._directory.get_by_id(contact_id)
        if existing is None:
            return ContactNotFound(contact_id=contact_id)
        cleaned = self._clean(form)
        if isinstance(cleaned, Rejected):
            return cleaned
        nickname, phone, image_uri = cleaned
        contact = Contact(
            id=contact_id,
            nickname=nickname,
            phone_number=phone,
            image_uri=image_uri,
            is_priority=form.is_priority,
            created_at=existing.created_at,
        )
        result = self._directory.update(contact)
        if result is None:
            return ContactNotFound(contact_id=contact_id)
        return result

    def delete_contact(self, contact_id: int) -> bool:
        existing = self._directory.get_by_id(contact_id)
        if existing is None:
            return False
        return self._directory.delete(existing)

    def get_contact(self, contact_id: int) -> ContactSummary | None:
        """Return a contact by id, or None if not found."""
        contact = self._directory.get_by_id(contact_id)
        if contact is None:
            return None
        return _summary(contact)

    def list_contacts(self) -> list[ContactSummary]:
        """Return all contacts, priority ones first, then by nickname."""
        ordered = sorted(
            self._directory.contacts,
            key=lambda c: (not c.is_priority, c.nickname.casefold()),
        )
        return [_summary(c) for c in ordered]

    def call(self, contact_id: int) -> CallPlaced | CallFailed | ContactNotFound:
        contact = self._directory.get_by_id(contact_id)
        if contact is None:
            return ContactNotFound(contact_id=contact_id)
        if self._dialer is None or not self._dialer.dial(contact.phone_number):
            return CallFailed(phone_number=contact.phone_number)
        return CallPlaced(phone_number=contact.phone_number)

    def export_contacts(self, sink: IO) -> bool:
        return self._directory.export_all(sink)

    def import_contacts(self, source: IO) -> bool:
        return self._directory.import_all(source)
