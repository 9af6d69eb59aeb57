"""Tests for the JSON contact list format."""

import json

import pytest

from callbook.domain import Contact
from callbook.infrastructure import JsonContactSerializer

SERIALIZER = JsonContactSerializer()


def test_dumps_uses_camel_case_and_omits_missing_image() -> None:
    payload = SERIALIZER.dumps(
        [
            Contact(id=2, nickname="Dad", phone_number="2", is_priority=True, created_at=20),
            Contact(id=1, nickname="Mom", phone_number="1", image_uri="/x.jpg", created_at=10),
        ]
    )
    assert json.loads(payload) == [
        {"id": 2, "nickname": "Dad", "phoneNumber": "2", "isPriority": True, "createdAt": 20},
        {
            "id": 1,
            "nickname": "Mom",
            "phoneNumber": "1",
            "imageUri": "/x.jpg",
            "isPriority": False,
            "createdAt": 10,
        },
    ]


def test_loads_fills_defaults_for_older_files() -> None:
    contacts = SERIALIZER.loads(
        '[{"id": 1, "nickname": "Mom", "phoneNumber": "1", "imageUri": null, "extra": 5}]'
    )
    assert contacts == [Contact(id=1, nickname="Mom", phone_number="1", created_at=0)]


def test_loads_treats_empty_image_as_none() -> None:
    contacts = SERIALIZER.loads('[{"id": 1, "nickname": "Mom", "phoneNumber": "1", "imageUri": ""}]')
    assert contacts[0].image_uri is None


@pytest.mark.parametrize(
    "payload",
    [
        "",
        "null",
        "{}",
        '[{"nickname": "Mom", "phoneNumber": "1"}]',
        '[{"id": 0, "nickname": "Mom", "phoneNumber": "1"}]',
        '[{"id": 1, "nickname": "Mom"}]',
        '[{"id": 1, "nickname": "  ", "phoneNumber": "1"}]',
    ],
)
def test_loads_rejects_malformed(payload: str) -> None:
    with pytest.raises(ValueError):
        SERIALIZER.loads(payload)
