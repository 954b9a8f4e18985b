"""Application layer: record store, view projection, use cases, ports and DTOs. Depends only on domain."""

from friends.application.avatar import Avatar, avatar_color, avatar_for, initials
from friends.application.dto import ContactCardData, MessageDraft, ViewState
from friends.application.errors import (
    FriendsError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from friends.application.friend_service import FriendService
from friends.application.ports import FriendRepository
from friends.application.projection import matches_search, project
from friends.application.record_store import FriendStore

__all__ = [
    "Avatar",
    "ContactCardData",
    "FriendRepository",
    "FriendService",
    "FriendStore",
    "FriendsError",
    "MessageDraft",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
    "ViewState",
    "avatar_color",
    "avatar_for",
    "initials",
    "matches_search",
    "project",
]
