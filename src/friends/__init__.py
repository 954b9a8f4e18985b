"""
Friends core: a headless store behind a card-grid contacts app.

- domain: the Friend entity and sort modes. No outer dependencies.
- application: FriendStore (record store), project (view projection), FriendService, ports, DTOs.
- infrastructure: adapters (InMemoryFriendRepository, SqlFriendRepository, Neo4jFriendRepository).
"""

from friends.application import (
    Avatar,
    ContactCardData,
    FriendRepository,
    FriendService,
    FriendStore,
    FriendsError,
    MessageDraft,
    NotFoundError,
    PersistenceError,
    ValidationError,
    ViewState,
    project,
)
from friends.domain import Friend, SortMode
from friends.infrastructure import (
    InMemoryFriendRepository,
    Neo4jFriendRepository,
    SqlFriendRepository,
)

__version__ = "0.1.0"

__all__ = [
    "Avatar",
    "ContactCardData",
    "Friend",
    "FriendRepository",
    "FriendService",
    "FriendStore",
    "FriendsError",
    "InMemoryFriendRepository",
    "MessageDraft",
    "Neo4jFriendRepository",
    "NotFoundError",
    "PersistenceError",
    "SortMode",
    "SqlFriendRepository",
    "ValidationError",
    "ViewState",
    "project",
]
