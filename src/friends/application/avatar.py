"""Fallback avatar for friends without a photo: initials on a colored circle."""

import zlib
from dataclasses import dataclass

PALETTE = (
    "blue",
    "green",
    "orange",
    "purple",
    "pink",
    "red",
    "indigo",
    "teal",
    "cyan",
    "mint",
)


@dataclass(frozen=True)
class Avatar:
    initials: str
    color: str
    has_photo: bool = False


def initials(name: str) -> str:
    """First letter of a single name, first+last letters of a longer one, "?" when blank."""
    parts = (name or "").split()
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def avatar_color(name: str) -> str:
    """Palette color picked by a hash of the name that is stable across runs."""
    digest = zlib.crc32((name or "").encode("utf-8"))
    return PALETTE[digest % len(PALETTE)]


def avatar_for(name: str, *, has_photo: bool = False) -> Avatar:
    return Avatar(initials=initials(name), color=avatar_color(name), has_photo=has_photo)
