"""
Command-line driver for the friends store.
Run: friends --help (or python -m friends), with .env or env vars set.
"""

import functools
import logging
from pathlib import Path

import click

from friends import __version__
from friends.application import (
    ContactCardData,
    FriendService,
    FriendsError,
    ViewState,
)
from friends.config import build_service, load_settings
from friends.domain import Friend, SortMode

logger = logging.getLogger(__name__)

# The original app's preview data.
SAMPLE_NAMES = ("Rexy", "Bella", "Charlie", "Daisy", "Fido", "Gus", "Mimi", "Luna")


def _format_friend(friend: Friend) -> str:
    """One line per card: position, star, name, phone, id."""
    star = "*" if friend.is_favorite else " "
    parts = [f"{friend.sort_order:>3} {star} {friend.name}"]
    if friend.phone_number:
        parts.append(f"Phone: {friend.phone_number}")
    if friend.has_photo:
        parts.append("[photo]")
    parts.append(f"({friend.id})")
    return "  ".join(parts)


def with_service(fn):
    """Pass the session's FriendService, flush queued changes, report FriendsError."""

    @click.pass_obj
    @functools.wraps(fn)
    def wrapper(service: FriendService, *args, **kwargs):
        try:
            result = fn(service, *args, **kwargs)
            service.store.flush()
        except FriendsError as e:
            raise click.ClickException(str(e)) from e
        return result

    return wrapper


@click.group()
@click.version_option(__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Manage your friends: add, edit, reorder, search and message."""
    if ctx.obj is not None:
        return
    try:
        settings = load_settings()
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level,
    )
    try:
        ctx.obj = build_service(settings)
    except FriendsError as e:
        raise click.ClickException(str(e)) from e
    logger.debug("Loaded %d friends", len(ctx.obj.store))


@cli.command("list")
@click.option("--search", "search_text", default="", help="Match name or phone number.")
@click.option("--favorites", "favorites_only", is_flag=True, help="Only favorites.")
@click.option(
    "--sort",
    "sort_mode",
    type=click.Choice([m.value for m in SortMode]),
    default=SortMode.CUSTOM.value,
    show_default=True,
)
@with_service
def list_friends(
    service: FriendService, search_text: str, favorites_only: bool, sort_mode: str
) -> None:
    view = ViewState(
        search_text=search_text,
        favorites_only=favorites_only,
        sort_mode=SortMode(sort_mode),
    )
    friends = service.visible_friends(view)
    if not friends:
        if view.is_filtering:
            click.echo("No friends match.")
        else:
            click.echo("No friends yet! Add a new friend to get started.")
        return
    for friend in friends:
        click.echo(_format_friend(friend))


@cli.command("add")
@click.argument("name", required=False)
@with_service
def add_friend(service: FriendService, name: str | None) -> None:
    friend = service.add_friend()
    if name:
        friend = service.rename(friend.id, name)
    click.echo(_format_friend(friend))


@cli.command("rename")
@click.argument("friend_id")
@click.argument("name")
@with_service
def rename(service: FriendService, friend_id: str, name: str) -> None:
    click.echo(_format_friend(service.rename(friend_id, name)))


@cli.command("favorite")
@click.argument("friend_id")
@with_service
def favorite(service: FriendService, friend_id: str) -> None:
    click.echo(_format_friend(service.toggle_favorite(friend_id)))


@cli.command("notes")
@click.argument("friend_id")
@click.argument("text")
@with_service
def notes(service: FriendService, friend_id: str, text: str) -> None:
    service.set_notes(friend_id, text)
    click.echo("Notes saved.")


@cli.command("phone")
@click.argument("friend_id")
@click.argument("number")
@with_service
def phone(service: FriendService, friend_id: str, number: str) -> None:
    click.echo(_format_friend(service.set_phone_number(friend_id, number)))


@cli.command("photo")
@click.argument("friend_id")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@with_service
def photo(service: FriendService, friend_id: str, path: Path) -> None:
    click.echo(_format_friend(service.set_photo(friend_id, path.read_bytes())))


@cli.command("move")
@click.argument("friend_id")
@click.argument("index", type=int)
@with_service
def move(service: FriendService, friend_id: str, index: int) -> None:
    for friend in service.move_friend(friend_id, index):
        click.echo(_format_friend(friend))


@cli.command("delete")
@click.argument("friend_id")
@with_service
def delete(service: FriendService, friend_id: str) -> None:
    service.remove_friend(friend_id)
    click.echo("Deleted.")


@cli.command("message")
@click.argument("friend_id")
@click.argument("body", required=False, default="")
@with_service
def message(service: FriendService, friend_id: str, body: str) -> None:
    draft = service.compose_message(friend_id, body)
    click.echo(f"To: {draft.recipient}")
    if draft.body:
        click.echo(draft.body)


@cli.command("import-contact")
@click.argument("friend_id")
@click.option("--given-name", default=None)
@click.option("--family-name", default=None)
@click.option("--phone", "phone_number", default=None)
@click.option(
    "--photo",
    "photo_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
)
@with_service
def import_contact(
    service: FriendService,
    friend_id: str,
    given_name: str | None,
    family_name: str | None,
    phone_number: str | None,
    photo_path: Path | None,
) -> None:
    card = ContactCardData(
        given_name=given_name,
        family_name=family_name,
        phone_number=phone_number,
        photo=photo_path.read_bytes() if photo_path else None,
    )
    click.echo(_format_friend(service.import_contact(friend_id, card)))


@cli.command("seed")
@with_service
def seed(service: FriendService) -> None:
    """Add the sample friends."""
    for name in SAMPLE_NAMES:
        friend = service.add_friend()
        service.rename(friend.id, name)
    click.echo(f"Added {len(SAMPLE_NAMES)} friends.")


def main() -> None:
    cli()
