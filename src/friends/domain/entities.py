"""Domain entities: Friend and the sort modes used to present friends."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

DEFAULT_NAME = "Best Friend"

# Fields the owner may edit. id, date_added and sort_order are managed by the store.
EDITABLE_FIELDS = frozenset({"name", "photo", "phone_number", "notes", "is_favorite"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SortMode(str, Enum):
    """How the friends grid is ordered."""

    CUSTOM = "custom"
    NAME = "name"
    DATE_ADDED = "date_added"
    FAVORITES_FIRST = "favorites_first"


@dataclass(frozen=True)
class Friend:
    """
    Represents one contact card kept by the owner.
    A Friend is immutable; edits produce a new instance with the same id.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = field(default=DEFAULT_NAME)
    photo: bytes | None = field(default=None, repr=False)
    phone_number: str = ""
    notes: str = ""
    is_favorite: bool = False
    date_added: datetime = field(default_factory=_utcnow)
    sort_order: int = 0

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise ValueError("Friend id must be non-empty.")
        if not isinstance(self.name, str):
            raise ValueError("Friend name must be text.")
        if self.photo is not None and not isinstance(self.photo, (bytes, bytearray)):
            raise ValueError("Friend photo must be bytes or None.")
        if isinstance(self.photo, bytearray):
            object.__setattr__(self, "photo", bytes(self.photo))
        if self.phone_number is None:
            object.__setattr__(self, "phone_number", "")
        if not isinstance(self.phone_number, str):
            raise ValueError("Friend phone_number must be text.")
        if self.notes is None:
            object.__setattr__(self, "notes", "")
        if not isinstance(self.notes, str):
            raise ValueError("Friend notes must be text.")
        if not isinstance(self.is_favorite, bool):
            raise ValueError("Friend is_favorite must be a bool.")
        if not isinstance(self.sort_order, int) or self.sort_order < 0:
            raise ValueError("Friend sort_order must be a non-negative int.")

    @property
    def has_photo(self) -> bool:
        return bool(self.photo)
