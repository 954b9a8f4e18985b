"""Tests for settings parsing and store wiring."""

import pytest

from friends.config import Settings, build_service, build_store, load_settings
from friends.infrastructure import InMemoryFriendRepository, SqlFriendRepository


def test_defaults():
    settings = load_settings({})
    assert settings == Settings()
    assert settings.storage == "sqlite"
    assert settings.auto_flush is True
    assert settings.default_region is None


def test_reads_environment():
    settings = load_settings(
        {
            "FRIENDS_STORAGE": " Memory ",
            "FRIENDS_AUTO_FLUSH": "off",
            "FRIENDS_DEFAULT_REGION": "us",
            "FRIENDS_LOG_LEVEL": "debug",
            "FRIENDS_OWNER_ID": "me",
        }
    )
    assert settings.storage == "memory"
    assert settings.auto_flush is False
    assert settings.default_region == "US"
    assert settings.log_level == "DEBUG"
    assert settings.owner_id == "me"


@pytest.mark.parametrize(
    "env",
    [
        {"FRIENDS_STORAGE": "postgres"},
        {"FRIENDS_AUTO_FLUSH": "maybe"},
        {"FRIENDS_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_values_raise(env):
    with pytest.raises(ValueError):
        load_settings(env)


def test_build_store_memory():
    store = build_store(Settings(storage="memory", auto_flush=False))
    assert isinstance(store._repo, InMemoryFriendRepository)
    assert store.auto_flush is False


def test_build_store_sqlite(tmp_path):
    url = f"sqlite:///{tmp_path / 'f.db'}"
    store = build_store(Settings(storage="sqlite", db_url=url))
    assert isinstance(store._repo, SqlFriendRepository)
    store.create("A")
    assert [f.name for f in build_store(Settings(db_url=url)).list()] == ["A"]


def test_build_service_normalizes_with_region():
    service = build_service(Settings(storage="memory", default_region="US"))
    friend = service.add_friend()
    service.set_phone_number(friend.id, "202 555 1234")
    assert service.compose_message(friend.id).recipient == "+12025551234"
