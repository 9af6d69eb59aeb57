"""In-memory implementation of ContactStore (no disk)."""

from collections.abc import Sequence

from callbook.domain import Contact


class InMemoryContactStore:
    """Keeps the last saved list in memory. Order preserved as saved.
    fail_saves makes every save report failure while still not raising.
    """

    def __init__(self, contacts: Sequence[Contact] = (), *, fail_saves: bool = False) -> None:
        self._contacts: list[Contact] = list(contacts)
        self.fail_saves = fail_saves
        self.save_count = 0

    @property
    def contacts(self) -> list[Contact]:
        return list(self._contacts)

    def load(self) -> list[Contact]:
        return list(self._contacts)

    def save(self, contacts: Sequence[Contact]) -> bool:
        self.save_count += 1
        if self.fail_saves:
            return False
        self._contacts = list(contacts)
        return True
