"""FriendStore: the single source of truth for the owner's friends.

Keeps the friends in memory, ordered by a dense sort_order (0..n-1), and writes
every change through a FriendRepository. With auto_flush each mutating call is
persisted before it returns; otherwise changes queue until flush(). A failed
write never leaves memory ahead of storage: the store restores what was last
persisted and raises PersistenceError.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from friends.application.errors import NotFoundError, PersistenceError, ValidationError
from friends.application.ports import FriendRepository
from friends.domain import DEFAULT_NAME, EDITABLE_FIELDS, Friend

logger = logging.getLogger(__name__)


class FriendStore:
    """Create, edit, delete and reorder friends. Single-threaded; call from the UI thread."""

    def __init__(self, repository: FriendRepository, *, auto_flush: bool = True) -> None:
        self._repo = repository
        self._auto_flush = auto_flush
        self._by_id: dict[str, Friend] = {}
        self._order: list[str] = []
        # Last state known to be in storage; restored when a write fails.
        self._saved_by_id: dict[str, Friend] = {}
        self._saved_order: list[str] = []
        self._dirty: set[str] = set()
        self._deleted: set[str] = set()
        self._load()

    @property
    def auto_flush(self) -> bool:
        return self._auto_flush

    @property
    def has_pending_changes(self) -> bool:
        return bool(self._dirty or self._deleted)

    def __len__(self) -> int:
        return len(self._order)

    def count(self) -> int:
        return len(self._order)

    def _load(self) -> None:
        stored = sorted(
            self._repo.list_all(),
            key=lambda f: (f.sort_order, f.date_added, f.id),
        )
        self._by_id = {f.id: f for f in stored}
        self._order = [f.id for f in stored]
        self._saved_by_id = dict(self._by_id)
        self._saved_order = list(self._order)
        repaired = self._renumbered(self._by_id, self._order)
        if repaired:
            # Older data may have gaps left by deletes that did not renumber.
            logger.warning("Repairing sort order of %d stored friends", len(repaired))
            self._apply(repaired, self._order, deleted=())

    # --- reads ---

    def list(self) -> list[Friend]:
        """Return all friends ascending by sort_order."""
        return [self._by_id[fid] for fid in self._order]

    def get(self, friend_id: str) -> Friend:
        friend = self._by_id.get(friend_id)
        if friend is None:
            raise NotFoundError(friend_id)
        return friend

    def __contains__(self, friend_id: object) -> bool:
        return friend_id in self._by_id

    # --- writes ---

    def create(self, initial_name: str = DEFAULT_NAME) -> Friend:
        """Insert a new friend at the end of the custom order."""
        try:
            friend = Friend(name=initial_name, sort_order=len(self._order))
        except ValueError as e:
            raise ValidationError(str(e)) from e
        self._apply({friend.id: friend}, self._order + [friend.id], deleted=())
        logger.debug("Created friend %s at position %d", friend.id, friend.sort_order)
        return friend

    def update(
        self,
        friend_id: str,
        changes: Mapping[str, Any] | None = None,
        /,
        **fields: Any,
    ) -> Friend:
        """Apply a partial set of field changes and return the updated friend."""
        current = self.get(friend_id)
        merged = dict(changes or {})
        merged.update(fields)
        unknown = set(merged) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}."
            )
        if not merged:
            return current
        try:
            updated = dataclasses.replace(current, **merged)
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e)) from e
        self._apply({friend_id: updated}, self._order, deleted=())
        logger.debug("Updated friend %s: %s", friend_id, ", ".join(sorted(merged)))
        return updated

    def delete(self, friend_id: str) -> None:
        """Remove a friend and close the gap it leaves in the custom order."""
        self.get(friend_id)
        order = [fid for fid in self._order if fid != friend_id]
        remaining = {fid: self._by_id[fid] for fid in order}
        changed = self._renumbered(remaining, order)
        self._apply(changed, order, deleted=(friend_id,))
        logger.debug("Deleted friend %s; renumbered %d", friend_id, len(changed))

    def reorder(self, moved_id: str, to_index: int) -> list[Friend]:
        """Move a friend to to_index (clamped) and renumber everyone."""
        self.get(moved_id)
        order = [fid for fid in self._order if fid != moved_id]
        try:
            to_index = int(to_index)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Reorder index must be an integer (got {to_index!r}).") from e
        to_index = max(0, min(to_index, len(order)))
        order.insert(to_index, moved_id)
        changed = self._renumbered(self._by_id, order)
        if changed:
            self._apply(changed, order, deleted=())
        logger.debug("Moved friend %s to %d", moved_id, to_index)
        return self.list()

    def flush(self) -> None:
        """Write queued changes. A no-op when nothing is pending."""
        if not self.has_pending_changes:
            return
        upserts = [self._by_id[fid] for fid in self._order if fid in self._dirty]
        deleted = sorted(self._deleted)
        try:
            self._repo.save(upserts, deleted_ids=deleted)
        except PersistenceError:
            logger.exception(
                "Failed to persist %d change(s); restoring last saved state",
                len(upserts) + len(deleted),
            )
            self._rollback()
            raise
        self._mark_saved()

    # --- internals ---

    @staticmethod
    def _renumbered(by_id: Mapping[str, Friend], order: list[str]) -> dict[str, Friend]:
        """Return the friends whose sort_order differs from their index in order."""
        changed = {}
        for index, fid in enumerate(order):
            friend = by_id[fid]
            if friend.sort_order != index:
                changed[fid] = dataclasses.replace(friend, sort_order=index)
        return changed

    def _apply(
        self,
        changed: Mapping[str, Friend],
        order: list[str],
        *,
        deleted: tuple[str, ...],
    ) -> None:
        """Install a new state as one unit, then persist it when auto-flushing."""
        for fid, friend in changed.items():
            self._by_id[fid] = friend
        for fid in deleted:
            self._by_id.pop(fid, None)
            self._dirty.discard(fid)
            if fid in self._saved_by_id:
                self._deleted.add(fid)
        self._order = list(order)
        self._dirty.update(changed)
        if self._auto_flush:
            self.flush()

    def _rollback(self) -> None:
        self._by_id = dict(self._saved_by_id)
        self._order = list(self._saved_order)
        self._dirty.clear()
        self._deleted.clear()

    def _mark_saved(self) -> None:
        self._saved_by_id = dict(self._by_id)
        self._saved_order = list(self._order)
        self._dirty.clear()
        self._deleted.clear()
