"""JSON codec for the whole contact list (store, backups, export files).

Wire format: a JSON array of
{"id", "nickname", "phoneNumber", "imageUri"?, "isPriority"?, "createdAt"?}.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from callbook.domain import Contact


class ContactRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(ge=1)
    nickname: str
    phone_number: str = Field(alias="phoneNumber")
    image_uri: str | None = Field(default=None, alias="imageUri")
    # Older files carry no isPriority / createdAt.
    is_priority: bool = Field(default=False, alias="isPriority")
    created_at: int = Field(default=0, alias="createdAt")

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactRecord":
        return cls(
            id=contact.id,
            nickname=contact.nickname,
            phone_number=contact.phone_number,
            image_uri=contact.image_uri,
            is_priority=contact.is_priority,
            created_at=contact.created_at,
        )

    def to_contact(self) -> Contact:
        return Contact(
            id=self.id,
            nickname=self.nickname,
            phone_number=self.phone_number,
            image_uri=self.image_uri or None,
            is_priority=self.is_priority,
            created_at=self.created_at,
        )


_RECORDS = TypeAdapter(list[ContactRecord])


class JsonContactSerializer:
    """Implements the ContactSerializer port."""

    def dumps(self, contacts: Sequence[Contact]) -> str:
        records = [ContactRecord.from_contact(c) for c in contacts]
        return _RECORDS.dump_json(records, by_alias=True, exclude_none=True, indent=2).decode(
            "utf-8"
        )

    def loads(self, payload: str) -> list[Contact]:
        """Parse a payload. Raises ValueError (pydantic ValidationError included) if malformed."""
        records = _RECORDS.validate_json(payload)
        ids = [r.id for r in records]
        if len(set(ids)) != len(ids):
            raise ValueError("Contact ids must be unique.")
        return [r.to_contact() for r in records]
