"""Domain entities: Contact and the directory-wide limits."""

import time
from dataclasses import dataclass, field

# Max contacts flagged as priority at any time.
MAX_PRIORITY = 3
# Default directory capacity; overridable per directory.
DEFAULT_MAX_CONTACTS = 30


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Contact:
    """
    A named shortcut to a phone number.
    id 0 means the contact has not been added to a directory yet.
    created_at is epoch milliseconds and never changes after creation.
    """

    id: int = 0
    nickname: str = field(default="")
    phone_number: str = field(default="")
    image_uri: str | None = None
    is_priority: bool = False
    created_at: int = field(default_factory=now_millis)

    def __post_init__(self):
        if not self.nickname or not self.nickname.strip():
            raise ValueError("Contact nickname must be non-empty.")

        if not self.phone_number or not self.phone_number.strip():
            raise ValueError("Contact phone number must be non-empty.")
