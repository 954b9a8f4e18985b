"""Plain values exchanged with the presentation layer and OS collaborators."""

from dataclasses import dataclass

from friends.domain import SortMode


@dataclass(frozen=True)
class ContactCardData:
    """Fields picked from the OS address book. Photo is raw image bytes, if any."""

    given_name: str | None = None
    family_name: str | None = None
    phone_number: str | None = None
    photo: bytes | None = None

    @property
    def full_name(self) -> str:
        parts = [(self.given_name or "").strip(), (self.family_name or "").strip()]
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class ViewState:
    """Transient UI state the grid is derived from."""

    search_text: str = ""
    favorites_only: bool = False
    sort_mode: SortMode = SortMode.CUSTOM

    @property
    def is_filtering(self) -> bool:
        return self.favorites_only or bool(self.search_text.strip())


@dataclass(frozen=True)
class MessageDraft:
    """Prefill for the external SMS composer."""

    friend_id: str
    recipient: str
    body: str = ""
