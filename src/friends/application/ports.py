"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from friends.domain import Friend


class FriendRepository(Protocol):
    """Persists the owner's friends. Each save is applied all-or-nothing."""

    def list_all(self) -> list[Friend]:
        """Return every stored friend, in any order."""
        ...

    def save(self, friends: Sequence[Friend], *, deleted_ids: Iterable[str] = ()) -> None:
        """Upsert friends and remove deleted_ids in one transaction.

        Raises PersistenceError if the write fails; nothing is applied in that case.
        """
        ...
