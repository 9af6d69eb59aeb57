"""Input DTO and result types for the contact use cases."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from callbook.domain import Contact


class RejectReason(str, Enum):
    """Why a mutation was refused. Checked before anything is persisted."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    EMPTY_NICKNAME = "empty_nickname"
    EMPTY_PHONE_NUMBER = "empty_phone_number"
    DUPLICATE_NICKNAME = "duplicate_nickname"
    PRIORITY_FULL = "priority_full"


@dataclass(frozen=True)
class ContactForm:
    """Raw values from an add/edit form (or API body). Not yet validated."""

    nickname: str
    phone_number: str
    image_uri: str | None = None
    is_priority: bool = False


@dataclass(frozen=True)
class ContactSummary:
    """One contact as returned by list_contacts and get_contact."""

    contact_id: int
    nickname: str
    phone_number: str
    image_uri: str | None
    is_priority: bool
    created_at: datetime


# --- mutation results ---


@dataclass(frozen=True)
class ContactAdded:
    """Contact was assigned an id, stored and published."""

    contact: Contact


@dataclass(frozen=True)
class ContactUpdated:
    """Contact was replaced in place, stored and published."""

    contact: Contact


@dataclass(frozen=True)
class Rejected:
    """Mutation refused; nothing changed."""

    reason: RejectReason


@dataclass(frozen=True)
class ContactNotFound:
    """No contact with the given id."""

    contact_id: int


# --- call results ---


@dataclass(frozen=True)
class CallPlaced:
    phone_number: str


@dataclass(frozen=True)
class CallFailed:
    """The dialer could not hand the number to the platform."""

    phone_number: str
