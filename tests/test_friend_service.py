"""Unit tests for FriendService. In-memory repo and plain DTOs only."""

import pytest

from friends.application import (
    ContactCardData,
    FriendService,
    FriendStore,
    MessageDraft,
    NotFoundError,
    ValidationError,
    ViewState,
)
from friends.domain import DEFAULT_NAME, SortMode
from friends.infrastructure import InMemoryFriendRepository, phone_normalizer


def _service(**kwargs) -> FriendService:
    return FriendService(FriendStore(InMemoryFriendRepository()), **kwargs)


def test_add_friend_uses_placeholder_name() -> None:
    service = _service()
    friend = service.add_friend()
    assert friend.name == DEFAULT_NAME
    assert friend.sort_order == 0
    assert service.store.list() == [friend]


def test_rename_strips_and_falls_back_to_placeholder() -> None:
    service = _service()
    friend = service.add_friend()
    assert service.rename(friend.id, "  Daisy  ").name == "Daisy"
    assert service.rename(friend.id, "   ").name == DEFAULT_NAME


def test_toggle_favorite_flips_flag() -> None:
    service = _service()
    friend = service.add_friend()
    assert service.toggle_favorite(friend.id).is_favorite is True
    assert service.toggle_favorite(friend.id).is_favorite is False


def test_set_photo_and_clear() -> None:
    service = _service()
    friend = service.add_friend()
    assert service.set_photo(friend.id, b"jpeg-bytes").photo == b"jpeg-bytes"
    assert service.set_photo(friend.id, None).photo is None
    assert service.set_photo(friend.id, b"").photo is None


def test_set_notes_and_phone() -> None:
    service = _service()
    friend = service.add_friend()
    service.set_notes(friend.id, "Likes tea")
    service.set_phone_number(friend.id, " 555 0100 ")
    stored = service.store.get(friend.id)
    assert stored.notes == "Likes tea"
    assert stored.phone_number == "555 0100"


def test_import_contact_fills_fields() -> None:
    service = _service(normalize_phone=phone_normalizer(None))
    friend = service.add_friend()
    card = ContactCardData(
        given_name="Bella",
        family_name="Smith",
        phone_number="+1 202 555 1234",
        photo=b"png",
    )
    imported = service.import_contact(friend.id, card)
    assert imported.name == "Bella Smith"
    assert imported.phone_number == "+12025551234"
    assert imported.photo == b"png"


def test_import_contact_keeps_unparseable_phone_verbatim() -> None:
    service = _service(normalize_phone=phone_normalizer(None))
    friend = service.add_friend()
    imported = service.import_contact(friend.id, ContactCardData(phone_number="ext 42"))
    assert imported.phone_number == "ext 42"


def test_import_contact_blank_fields_do_not_overwrite() -> None:
    service = _service()
    friend = service.add_friend()
    service.rename(friend.id, "Daisy")
    service.set_photo(friend.id, b"old")
    imported = service.import_contact(friend.id, ContactCardData(phone_number="555 0100"))
    assert imported.name == "Daisy"
    assert imported.photo == b"old"
    assert imported.phone_number == "555 0100"


def test_import_contact_unknown_friend_raises() -> None:
    service = _service()
    with pytest.raises(NotFoundError):
        service.import_contact("missing", ContactCardData(given_name="X"))


def test_move_and_remove_keep_order_dense() -> None:
    service = _service()
    ids = [service.add_friend().id for _ in range(4)]
    moved = service.move_friend(ids[3], 0)
    assert [f.id for f in moved] == [ids[3], ids[0], ids[1], ids[2]]
    service.remove_friend(ids[0])
    assert [f.sort_order for f in service.store.list()] == [0, 1, 2]


def test_visible_friends_applies_view() -> None:
    service = _service()
    amy = service.rename(service.add_friend().id, "Amy")
    zed = service.rename(service.add_friend().id, "Zed")
    service.toggle_favorite(zed.id)

    assert [f.id for f in service.visible_friends()] == [amy.id, zed.id]
    view = ViewState(sort_mode=SortMode.FAVORITES_FIRST)
    assert [f.id for f in service.visible_friends(view)] == [zed.id, amy.id]
    assert [f.name for f in service.visible_friends(ViewState(search_text="am"))] == ["Amy"]


def test_compose_message_normalizes_recipient() -> None:
    service = _service(normalize_phone=phone_normalizer("US"))
    friend = service.add_friend()
    service.set_phone_number(friend.id, "202 555 1234")

    draft = service.compose_message(friend.id, "Hey!")

    assert draft == MessageDraft(friend_id=friend.id, recipient="+12025551234", body="Hey!")
    # Stored number is left as typed.
    assert service.store.get(friend.id).phone_number == "202 555 1234"


def test_compose_message_without_normalizer_uses_raw_number() -> None:
    service = _service()
    friend = service.add_friend()
    service.set_phone_number(friend.id, "555 0100")
    assert service.compose_message(friend.id).recipient == "555 0100"


def test_compose_message_without_phone_raises() -> None:
    service = _service()
    friend = service.add_friend()
    with pytest.raises(ValidationError):
        service.compose_message(friend.id)


def test_avatar_reflects_photo_and_name() -> None:
    service = _service()
    friend = service.rename(service.add_friend().id, "John Doe")
    avatar = service.avatar(friend.id)
    assert avatar.initials == "JD"
    assert avatar.has_photo is False
    service.set_photo(friend.id, b"img")
    assert service.avatar(friend.id).has_photo is True
