"""Infrastructure layer: concrete implementations of application ports."""

from friends.infrastructure.memory_repository import InMemoryFriendRepository
from friends.infrastructure.persistence.engine import make_engine
from friends.infrastructure.persistence.neo4j_repository import (
    Neo4jFriendRepository,
    ensure_friend_constraint,
)
from friends.infrastructure.persistence.sql_repository import SqlFriendRepository
from friends.infrastructure.phone import normalize_phone, phone_normalizer

__all__ = [
    "InMemoryFriendRepository",
    "Neo4jFriendRepository",
    "SqlFriendRepository",
    "ensure_friend_constraint",
    "make_engine",
    "normalize_phone",
    "phone_normalizer",
]
