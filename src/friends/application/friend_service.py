"""Use cases behind the friends grid: add, edit, import, reorder, message."""

from collections.abc import Callable

from friends.application.avatar import Avatar, avatar_for
from friends.application.dto import ContactCardData, MessageDraft, ViewState
from friends.application.errors import ValidationError
from friends.application.projection import project
from friends.application.record_store import FriendStore
from friends.domain import DEFAULT_NAME, Friend

PhoneNormalizer = Callable[[str], str | None]


class FriendService:
    """Thin layer over FriendStore that applies the app's editing rules."""

    def __init__(
        self,
        store: FriendStore,
        *,
        normalize_phone: PhoneNormalizer | None = None,
    ) -> None:
        self._store = store
        self._normalize_phone = normalize_phone

    @property
    def store(self) -> FriendStore:
        return self._store

    def add_friend(self) -> Friend:
        """New card named "Best Friend", appended last; the UI opens it for editing."""
        return self._store.create(DEFAULT_NAME)

    def rename(self, friend_id: str, name: str) -> Friend:
        clean = (name or "").strip() or DEFAULT_NAME
        return self._store.update(friend_id, name=clean)

    def set_photo(self, friend_id: str, photo: bytes | None) -> Friend:
        return self._store.update(friend_id, photo=photo or None)

    def set_phone_number(self, friend_id: str, phone_number: str) -> Friend:
        return self._store.update(friend_id, phone_number=(phone_number or "").strip())

    def set_notes(self, friend_id: str, notes: str) -> Friend:
        return self._store.update(friend_id, notes=notes or "")

    def toggle_favorite(self, friend_id: str) -> Friend:
        friend = self._store.get(friend_id)
        return self._store.update(friend_id, is_favorite=not friend.is_favorite)

    def import_contact(self, friend_id: str, card: ContactCardData) -> Friend:
        """Fill a friend from an address-book contact. Blank card fields are ignored."""
        changes: dict = {}
        name = card.full_name
        if name:
            changes["name"] = name
        raw_phone = (card.phone_number or "").strip()
        if raw_phone:
            changes["phone_number"] = self._normalized(raw_phone) or raw_phone
        if card.photo:
            changes["photo"] = card.photo
        return self._store.update(friend_id, changes)

    def move_friend(self, friend_id: str, to_index: int) -> list[Friend]:
        return self._store.reorder(friend_id, to_index)

    def remove_friend(self, friend_id: str) -> None:
        self._store.delete(friend_id)

    def visible_friends(self, view: ViewState | None = None) -> list[Friend]:
        return project(self._store.list(), view)

    def compose_message(self, friend_id: str, body: str = "") -> MessageDraft:
        """Prefill for the SMS composer. Delivery results are not recorded."""
        friend = self._store.get(friend_id)
        raw_phone = (friend.phone_number or "").strip()
        if not raw_phone:
            raise ValidationError(f"{friend.name} has no phone number to message.")
        recipient = self._normalized(raw_phone) or raw_phone
        return MessageDraft(friend_id=friend.id, recipient=recipient, body=body or "")

    def avatar(self, friend_id: str) -> Avatar:
        friend = self._store.get(friend_id)
        return avatar_for(friend.name, has_photo=friend.has_photo)

    def _normalized(self, raw_phone: str) -> str | None:
        if self._normalize_phone is None:
            return None
        return self._normalize_phone(raw_phone)
