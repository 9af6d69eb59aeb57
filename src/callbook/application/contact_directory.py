"""Contact directory: the authoritative in-memory list, its invariants and observers."""

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import IO

from callbook.application.dto import (
    ContactAdded,
    ContactUpdated,
    Rejected,
    RejectReason,
)
from callbook.application.ports import ContactSerializer, ContactStore, ImageStore
from callbook.domain import DEFAULT_MAX_CONTACTS, MAX_PRIORITY, Contact

logger = logging.getLogger(__name__)

Snapshot = tuple[Contact, ...]
Observer = Callable[[Snapshot], None]


def _nickname_key(nickname: str) -> str:
    return (nickname or "").strip().casefold()


class ContactDirectory:
    """Owns the contact list. Every mutation is a whole-list read-modify-write:
    validate, build the new tuple, persist through the store, then publish it.
    Observers only ever see complete snapshots, newest first by insertion.
    """

    def __init__(
        self,
        store: ContactStore,
        serializer: ContactSerializer,
        *,
        images: ImageStore | None = None,
        max_contacts: int = DEFAULT_MAX_CONTACTS,
        max_priority: int = MAX_PRIORITY,
    ) -> None:
        if max_contacts < 1:
            raise ValueError("max_contacts must be at least 1.")
        self._store = store
        self._serializer = serializer
        self._images = images
        self._max_contacts = max_contacts
        self._max_priority = max_priority
        self._lock = threading.RLock()
        self._observers: list[Observer] = []
        self._contacts: Snapshot = tuple(store.load())
        # Highest id issued so far; a deleted top id is not handed out again.
        self._last_id = max((c.id for c in self._contacts), default=0)

    @property
    def contacts(self) -> Snapshot:
        return self._contacts

    @property
    def max_contacts(self) -> int:
        return self._max_contacts

    # --- observers ---

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer. It gets the current snapshot now and every new one after.
        Returns a callable that unsubscribes it.
        """
        with self._lock:
            self._observers.append(observer)
            self._notify(observer, self._contacts)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _notify(self, observer: Observer, snapshot: Snapshot) -> None:
        try:
            observer(snapshot)
        except Exception:
            logger.exception("Contact observer %r failed", observer)

    def _commit(self, contacts: Sequence[Contact]) -> None:
        snapshot = tuple(contacts)
        if not self._store.save(snapshot):
            logger.warning("Saving %d contacts failed; keeping in-memory list", len(snapshot))
        self._contacts = snapshot
        for observer in list(self._observers):
            self._notify(observer, snapshot)

    # --- queries ---

    def get_by_id(self, contact_id: int) -> Contact | None:
        return next((c for c in self._contacts if c.id == contact_id), None)

    def count(self) -> int:
        return len(self._contacts)

    def is_nickname_duplicate(self, nickname: str, exclude_id: int | None = None) -> bool:
        key = _nickname_key(nickname)
        return any(
            c.id != exclude_id and _nickname_key(c.nickname) == key
            for c in self._contacts
        )

    def is_priority_full(self, exclude_id: int | None = None) -> bool:
        taken = sum(1 for c in self._contacts if c.is_priority and c.id != exclude_id)
        return taken >= self._max_priority

    # --- mutations ---

    def add(self, contact: Contact) -> ContactAdded | Rejected:
        """Assign an id, copy the image into the sidecar, insert at the front."""
        with self._lock:
            if self.count() >= self._max_contacts:
                return Rejected(reason=RejectReason.CAPACITY_EXCEEDED)
            if self.is_nickname_duplicate(contact.nickname):
                return Rejected(reason=RejectReason.DUPLICATE_NICKNAME)
            if contact.is_priority and self.is_priority_full():
                return Rejected(reason=RejectReason.PRIORITY_FULL)

            new_id = max(self._last_id, max((c.id for c in self._contacts), default=0)) + 1
            stored = replace(
                contact,
                id=new_id,
                image_uri=self._resolve_image(contact.image_uri, new_id),
            )
            self._last_id = new_id
            self._commit((stored, *self._contacts))
            logger.info("Added contact %d", new_id)
            return ContactAdded(contact=stored)

    def update(self, contact: Contact) -> ContactUpdated | Rejected | None:
        """Replace the contact with the same id, keeping its position and created_at.
        Returns None when the id is unknown.
        """
        with self._lock:
            index = next(
                (i for i, c in enumerate(self._contacts) if c.id == contact.id), None
            )
            if index is None:
                return None
            if self.is_nickname_duplicate(contact.nickname, exclude_id=contact.id):
                return Rejected(reason=RejectReason.DUPLICATE_NICKNAME)
            if contact.is_priority and self.is_priority_full(exclude_id=contact.id):
                return Rejected(reason=RejectReason.PRIORITY_FULL)

            existing = self._contacts[index]
            image_uri = existing.image_uri
            if contact.image_uri != existing.image_uri:
                if contact.image_uri:
                    image_uri = self._resolve_image(contact.image_uri, contact.id)
                else:
                    self._delete_image(contact.id)
                    image_uri = contact.image_uri
            stored = replace(contact, created_at=existing.created_at, image_uri=image_uri)

            contacts = list(self._contacts)
            contacts[index] = stored
            self._commit(contacts)
            return ContactUpdated(contact=stored)

    def delete(self, contact: Contact) -> bool:
        """Remove the contact and its sidecar image. Returns False when the id is unknown."""
        with self._lock:
            remaining = [c for c in self._contacts if c.id != contact.id]
            if len(remaining) == len(self._contacts):
                return False
            self._delete_image(contact.id)
            self._commit(remaining)
            logger.info("Deleted contact %d", contact.id)
            return True

    # --- export / import ---

    def export_all(self, sink: IO) -> bool:
        """Write the whole list to a text or binary file object."""
        with self._lock:
            contacts = self._contacts
            payload = self._serializer.dumps(contacts)
        try:
            try:
                sink.write(payload)
            except TypeError:
                # Binary sink.
                sink.write(payload.encode("utf-8"))
            sink.flush()
        except (OSError, ValueError, TypeError):
            logger.exception("Export failed")
            return False
        logger.info("Exported %d contacts", len(contacts))
        return True

    def import_all(self, source: IO) -> bool:
        """Replace the whole list with the one read from a text or binary file object.
        Nothing changes if the payload is blank, malformed, empty or breaks a limit.
        """
        try:
            data = source.read()
            payload = data.decode("utf-8") if isinstance(data, bytes) else data
            if not payload or not payload.strip():
                logger.warning("Import rejected: empty payload")
                return False
            contacts = self._serializer.loads(payload)
        except (OSError, ValueError):
            logger.exception("Import failed")
            return False

        problem = self._check_imported(contacts)
        if problem:
            logger.warning("Import rejected: %s", problem)
            return False

        with self._lock:
            kept_images = {c.id: c.image_uri for c in contacts}
            for old in self._contacts:
                if old.image_uri and kept_images.get(old.id) != old.image_uri:
                    self._delete_image(old.id)
            self._last_id = max(self._last_id, max(c.id for c in contacts))
            self._commit(contacts)
        logger.info("Imported %d contacts", len(contacts))
        return True

    def _check_imported(self, contacts: Sequence[Contact]) -> str | None:
        if not contacts:
            return "no contacts"
        if len(contacts) > self._max_contacts:
            return f"{len(contacts)} contacts exceed the limit of {self._max_contacts}"
        if sum(1 for c in contacts if c.is_priority) > self._max_priority:
            return f"more than {self._max_priority} priority contacts"
        keys = {_nickname_key(c.nickname) for c in contacts}
        if len(keys) != len(contacts):
            return "duplicate nicknames"
        return None

    # --- images ---

    def _resolve_image(self, reference: str | None, contact_id: int) -> str | None:
        if self._images is None or not reference:
            return reference
        return self._images.resolve(reference, contact_id)

    def _delete_image(self, contact_id: int) -> None:
        if self._images is not None:
            self._images.delete(contact_id)
