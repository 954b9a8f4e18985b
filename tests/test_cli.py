"""Tests for the click CLI, driven through CliRunner with an in-memory service."""

import pytest
from click.testing import CliRunner

from friends.application import FriendService, FriendStore
from friends.cli import SAMPLE_NAMES, cli
from friends.infrastructure import InMemoryFriendRepository, phone_normalizer


@pytest.fixture
def service():
    return FriendService(
        FriendStore(InMemoryFriendRepository()),
        normalize_phone=phone_normalizer("US"),
    )


@pytest.fixture
def run(service):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, list(args), obj=service)

    return _run


def test_list_empty(run):
    result = run("list")
    assert result.exit_code == 0
    assert "No friends yet" in result.output


def test_list_no_matches(run, service):
    service.add_friend()
    result = run("list", "--search", "zzz")
    assert result.exit_code == 0
    assert "No friends match." in result.output


def test_add_and_list(run, service):
    result = run("add", "Daisy")
    assert result.exit_code == 0
    assert "Daisy" in result.output
    assert [f.name for f in service.store.list()] == ["Daisy"]

    listed = run("list")
    assert "Daisy" in listed.output


def test_seed_adds_sample_friends(run, service):
    result = run("seed")
    assert result.exit_code == 0
    assert [f.name for f in service.store.list()] == list(SAMPLE_NAMES)


def test_move_and_delete(run, service):
    run("seed")
    ids = [f.id for f in service.store.list()]

    assert run("move", ids[-1], "0").exit_code == 0
    assert service.store.list()[0].name == "Luna"

    assert run("delete", ids[0]).exit_code == 0
    orders = [f.sort_order for f in service.store.list()]
    assert orders == list(range(len(SAMPLE_NAMES) - 1))


def test_favorite_and_sorted_list(run, service):
    run("seed")
    gus = next(f for f in service.store.list() if f.name == "Gus")
    assert run("favorite", gus.id).exit_code == 0

    result = run("list", "--sort", "favorites_first")
    first_line = result.output.splitlines()[0]
    assert "Gus" in first_line
    assert "*" in first_line

    only = run("list", "--favorites")
    assert len(only.output.splitlines()) == 1


def test_message_prints_recipient(run, service):
    friend = service.add_friend()
    run("phone", friend.id, "202 555 1234")
    result = run("message", friend.id, "See you soon")
    assert result.exit_code == 0
    assert "To: +12025551234" in result.output
    assert "See you soon" in result.output


def test_message_without_phone_fails(run, service):
    friend = service.add_friend()
    result = run("message", friend.id)
    assert result.exit_code == 1
    assert "no phone number" in result.output


def test_unknown_id_reports_error(run):
    result = run("rename", "missing", "X")
    assert result.exit_code == 1
    assert "missing" in result.output


def test_import_contact_with_photo(run, service, tmp_path):
    friend = service.add_friend()
    photo = tmp_path / "face.jpg"
    photo.write_bytes(b"jpeg")
    result = run(
        "import-contact",
        friend.id,
        "--given-name",
        "Bella",
        "--family-name",
        "Smith",
        "--phone",
        "+1 202 555 1234",
        "--photo",
        str(photo),
    )
    assert result.exit_code == 0
    stored = service.store.get(friend.id)
    assert stored.name == "Bella Smith"
    assert stored.phone_number == "+12025551234"
    assert stored.photo == b"jpeg"
    assert "[photo]" in result.output


def test_notes(run, service):
    friend = service.add_friend()
    assert run("notes", friend.id, "Loves hiking").exit_code == 0
    assert service.store.get(friend.id).notes == "Loves hiking"


def test_batched_service_is_flushed_after_command():
    repo = InMemoryFriendRepository()
    service = FriendService(FriendStore(repo, auto_flush=False))
    result = CliRunner().invoke(cli, ["add", "Amy"], obj=service)
    assert result.exit_code == 0
    assert [f.name for f in repo.list_all()] == ["Amy"]
