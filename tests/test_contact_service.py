"""Unit tests for ContactService. In-memory store, fake dialer, no platform calls."""

import io

from callbook.application import (
    CallFailed,
    CallPlaced,
    ContactAdded,
    ContactDirectory,
    ContactForm,
    ContactNotFound,
    ContactService,
    ContactUpdated,
    Rejected,
    RejectReason,
)
from callbook.infrastructure import InMemoryContactStore, JsonContactSerializer, normalize_phone


class FakeDialer:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.dialed: list[str] = []

    def dial(self, phone_number: str) -> bool:
        self.dialed.append(phone_number)
        return self.ok


def _service(dialer: FakeDialer | None = None, max_contacts: int = 30) -> ContactService:
    directory = ContactDirectory(
        InMemoryContactStore(), JsonContactSerializer(), max_contacts=max_contacts
    )
    return ContactService(directory, dialer=dialer, normalize_phone=normalize_phone)


def test_valid_form_creates_contact() -> None:
    service = _service()
    result = service.add_contact(ContactForm(nickname="  Mom ", phone_number=" +1 202 555 1234 "))
    assert isinstance(result, ContactAdded)
    assert result.contact.nickname == "Mom"
    assert result.contact.phone_number == "+12025551234"

    listed = service.list_contacts()
    assert len(listed) == 1
    assert listed[0].nickname == "Mom"
    assert listed[0].contact_id == result.contact.id


def test_unparseable_phone_is_kept_as_typed() -> None:
    service = _service()
    result = service.add_contact(ContactForm(nickname="Pizza", phone_number="1588-0000"))
    assert isinstance(result, ContactAdded)
    assert result.contact.phone_number == "1588-0000"


def test_invalid_missing_nickname_or_phone() -> None:
    service = _service()
    r = service.add_contact(ContactForm(nickname="   ", phone_number="123"))
    assert r == Rejected(reason=RejectReason.EMPTY_NICKNAME)

    r2 = service.add_contact(ContactForm(nickname="Mom", phone_number=""))
    assert r2 == Rejected(reason=RejectReason.EMPTY_PHONE_NUMBER)
    assert service.list_contacts() == []


def test_duplicate_nickname_and_capacity_come_from_directory() -> None:
    service = _service(max_contacts=1)
    assert isinstance(service.add_contact(ContactForm("Mom", "1")), ContactAdded)
    r = service.add_contact(ContactForm("Dad", "2"))
    assert r == Rejected(reason=RejectReason.CAPACITY_EXCEEDED)

    service = _service()
    service.add_contact(ContactForm("Mom", "1"))
    r = service.add_contact(ContactForm("mom", "2"))
    assert r == Rejected(reason=RejectReason.DUPLICATE_NICKNAME)


def test_list_puts_priority_first_then_nickname() -> None:
    service = _service()
    for nickname, priority in [("zed", False), ("Bob", True), ("alice", False), ("Carol", True)]:
        service.add_contact(ContactForm(nickname, "1", is_priority=priority))

    assert [s.nickname for s in service.list_contacts()] == ["Bob", "Carol", "alice", "zed"]


def test_update_contact() -> None:
    service = _service()
    added = service.add_contact(ContactForm("Mom", "1"))
    contact_id = added.contact.id

    result = service.update_contact(contact_id, ContactForm("Mother", "2", is_priority=True))
    assert isinstance(result, ContactUpdated)
    summary = service.get_contact(contact_id)
    assert summary.nickname == "Mother"
    assert summary.is_priority is True
    assert round(summary.created_at.timestamp() * 1000) == added.contact.created_at


def test_update_unknown_and_invalid() -> None:
    service = _service()
    assert service.update_contact(7, ContactForm("X", "1")) == ContactNotFound(contact_id=7)

    added = service.add_contact(ContactForm("Mom", "1"))
    r = service.update_contact(added.contact.id, ContactForm("", "1"))
    assert r == Rejected(reason=RejectReason.EMPTY_NICKNAME)
    assert service.get_contact(added.contact.id).nickname == "Mom"


def test_delete_contact() -> None:
    service = _service()
    added = service.add_contact(ContactForm("Mom", "1"))
    assert service.delete_contact(added.contact.id) is True
    assert service.delete_contact(added.contact.id) is False
    assert service.get_contact(added.contact.id) is None


def test_call_uses_dialer() -> None:
    dialer = FakeDialer()
    service = _service(dialer)
    added = service.add_contact(ContactForm("Mom", "+12025551234"))

    assert service.call(added.contact.id) == CallPlaced(phone_number="+12025551234")
    assert dialer.dialed == ["+12025551234"]
    assert service.call(99) == ContactNotFound(contact_id=99)


def test_call_failure_is_reported_not_raised() -> None:
    service = _service(FakeDialer(ok=False))
    added = service.add_contact(ContactForm("Mom", "1"))
    assert service.call(added.contact.id) == CallFailed(phone_number="1")

    no_dialer = _service()
    added = no_dialer.add_contact(ContactForm("Mom", "1"))
    assert isinstance(no_dialer.call(added.contact.id), CallFailed)


def test_export_import_through_service() -> None:
    service = _service()
    service.add_contact(ContactForm("Mom", "1"))
    buffer = io.BytesIO()
    assert service.export_contacts(buffer) is True

    other = _service()
    assert other.import_contacts(io.BytesIO(buffer.getvalue())) is True
    assert [s.nickname for s in other.list_contacts()] == ["Mom"]
