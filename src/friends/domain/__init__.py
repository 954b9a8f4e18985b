"""Domain layer: entities and value objects. No dependencies on outer layers."""

from friends.domain.entities import DEFAULT_NAME, EDITABLE_FIELDS, Friend, SortMode

__all__ = ["DEFAULT_NAME", "EDITABLE_FIELDS", "Friend", "SortMode"]
