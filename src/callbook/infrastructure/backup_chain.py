"""Backup/restore chain: a primary backend mirrored to secondary backends.

Restore walks primary -> secondaries in order and stops at the first
non-empty list. A list found in a secondary is written back to the primary.
Save writes the primary, then mirrors the same payload to every secondary.
"""

import logging
from collections.abc import Sequence

from callbook.application.ports import ContactSerializer
from callbook.domain import Contact
from callbook.infrastructure.backends import StorageBackend

logger = logging.getLogger(__name__)


class BackupChain:
    """Implements the ContactStore port over an ordered list of backends."""

    def __init__(
        self,
        primary: StorageBackend,
        serializer: ContactSerializer,
        secondaries: Sequence[StorageBackend] = (),
    ) -> None:
        self.primary = primary
        self.secondaries = tuple(secondaries)
        self._serializer = serializer

    @property
    def backends(self) -> tuple[StorageBackend, ...]:
        return (self.primary, *self.secondaries)

    def _load_from(self, backend: StorageBackend) -> list[Contact]:
        payload = backend.read()
        if payload is None:
            return []
        try:
            return self._serializer.loads(payload)
        except ValueError:
            logger.warning("Ignoring malformed contacts in %s backend", backend.name, exc_info=True)
            return []

    def load(self) -> list[Contact]:
        contacts = self._load_from(self.primary)
        if contacts:
            logger.debug("Loaded %d contacts from %s", len(contacts), self.primary.name)
            return contacts

        for backend in self.secondaries:
            logger.info("%s backend empty, trying %s", self.primary.name, backend.name)
            contacts = self._load_from(backend)
            if contacts:
                logger.info("Restored %d contacts from %s", len(contacts), backend.name)
                if not self.primary.write(self._serializer.dumps(contacts)):
                    logger.warning("Could not write restored contacts back to %s", self.primary.name)
                return contacts

        logger.info("No contacts found in any backend")
        return []

    def save(self, contacts: Sequence[Contact]) -> bool:
        payload = self._serializer.dumps(contacts)
        if not self.primary.write(payload):
            return False
        for backend in self.secondaries:
            if not backend.write(payload):
                logger.warning("Mirroring contacts to %s failed", backend.name)
        return True
