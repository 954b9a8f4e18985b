"""View projection: store snapshot + ViewState -> the ordered list the grid shows.

Pure functions; nothing here holds on to friends between calls.
"""

from collections.abc import Iterable

from friends.application.dto import ViewState
from friends.domain import Friend, SortMode


def matches_search(friend: Friend, search_text: str) -> bool:
    """Case-insensitive substring match on name and phone number. Blank matches all."""
    needle = (search_text or "").strip().casefold()
    if not needle:
        return True
    return needle in friend.name.casefold() or needle in (friend.phone_number or "").casefold()


def _sort_key(sort_mode: SortMode):
    if sort_mode == SortMode.NAME:
        return lambda f: (f.name.casefold(), f.sort_order)
    if sort_mode == SortMode.DATE_ADDED:
        # Newest first; equal timestamps keep the custom order.
        return lambda f: (-f.date_added.timestamp(), f.sort_order)
    if sort_mode == SortMode.FAVORITES_FIRST:
        return lambda f: (not f.is_favorite, f.sort_order)
    return lambda f: f.sort_order


def project(friends: Iterable[Friend], view: ViewState | None = None) -> list[Friend]:
    """Filter and order friends for display. Returns the same Friend objects."""
    view = view or ViewState()
    visible = [
        f
        for f in friends
        if (not view.favorites_only or f.is_favorite)
        and matches_search(f, view.search_text)
    ]
    return sorted(visible, key=_sort_key(SortMode(view.sort_mode)))
