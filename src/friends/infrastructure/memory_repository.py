"""In-memory implementation of FriendRepository (no DB)."""

from collections.abc import Iterable, Sequence

from friends.domain import Friend


class InMemoryFriendRepository:
    """Stores friends in a dict keyed by id. Lost when the process exits."""

    def __init__(self, friends: Iterable[Friend] = ()) -> None:
        self._by_id: dict[str, Friend] = {f.id: f for f in friends}
        self.save_count = 0

    def list_all(self) -> list[Friend]:
        return list(self._by_id.values())

    def save(self, friends: Sequence[Friend], *, deleted_ids: Iterable[str] = ()) -> None:
        # Build the next state first so a bad item leaves the current one untouched.
        next_state = dict(self._by_id)
        for fid in deleted_ids:
            next_state.pop(fid, None)
        for friend in friends:
            next_state[friend.id] = friend
        self._by_id = next_state
        self.save_count += 1
