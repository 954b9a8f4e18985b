"""Application errors surfaced to the presentation layer. None are retried automatically."""


class FriendsError(Exception):
    """Base class for every error raised by the friends core."""


class NotFoundError(FriendsError):
    """An operation referenced a friend id the store does not hold."""

    def __init__(self, friend_id: str) -> None:
        super().__init__(f"No friend with id {friend_id!r}.")
        self.friend_id = friend_id


class PersistenceError(FriendsError):
    """The underlying storage failed. The store has already rolled back."""


class ValidationError(FriendsError, ValueError):
    """A field change or use-case input was rejected."""
