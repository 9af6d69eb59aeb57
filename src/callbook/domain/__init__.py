"""Domain layer: entities and limits. No dependencies on outer layers."""

from callbook.domain.entities import (
    DEFAULT_MAX_CONTACTS,
    MAX_PRIORITY,
    Contact,
    now_millis,
)

__all__ = ["DEFAULT_MAX_CONTACTS", "MAX_PRIORITY", "Contact", "now_millis"]
