"""Tests for the initials fallback avatar."""

from friends.application import avatar_color, initials
from friends.application.avatar import PALETTE, avatar_for


def test_initials_single_name():
    assert initials("John") == "J"
    assert initials("daisy") == "D"


def test_initials_uses_first_and_last_parts():
    assert initials("John Doe") == "JD"
    assert initials("mary ann smith") == "MS"
    assert initials("  Bella   Smith ") == "BS"


def test_initials_blank_name():
    assert initials("") == "?"
    assert initials("   ") == "?"


def test_color_is_stable_and_from_palette():
    assert avatar_color("John Doe") == avatar_color("John Doe")
    assert avatar_color("John Doe") in PALETTE
    assert avatar_color("") in PALETTE


def test_avatar_for_bundles_fields():
    avatar = avatar_for("Rexy", has_photo=True)
    assert avatar.initials == "R"
    assert avatar.color == avatar_color("Rexy")
    assert avatar.has_photo is True
