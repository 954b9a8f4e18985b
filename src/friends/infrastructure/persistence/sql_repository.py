"""SQLAlchemy implementation of FriendRepository (SQLite by default)."""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from friends.application.errors import PersistenceError
from friends.domain import Friend
from friends.infrastructure.persistence.engine import make_engine
from friends.infrastructure.persistence.schema import friends_table, metadata

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = (
    "name",
    "photo",
    "phone_number",
    "notes",
    "is_favorite",
    "date_added",
    "sort_order",
)


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _friend_to_row(friend: Friend) -> dict:
    return {
        "id": friend.id,
        "name": friend.name,
        "photo": friend.photo,
        "phone_number": friend.phone_number or "",
        "notes": friend.notes or "",
        "is_favorite": friend.is_favorite,
        "date_added": _as_utc(friend.date_added),
        "sort_order": friend.sort_order,
    }


def _row_to_friend(row) -> Friend:
    return Friend(
        id=row.id,
        name=row.name or "",
        photo=bytes(row.photo) if row.photo is not None else None,
        phone_number=row.phone_number or "",
        notes=row.notes or "",
        is_favorite=bool(row.is_favorite),
        date_added=_as_utc(row.date_added),
        sort_order=int(row.sort_order),
    )


class SqlFriendRepository:
    """Stores friends in a relational table. Each save runs in one transaction."""

    def __init__(self, engine: Engine, *, create_schema: bool = True) -> None:
        self._engine = engine
        self._dialect = engine.dialect.name
        if create_schema:
            try:
                metadata.create_all(engine)
            except SQLAlchemyError as e:
                raise PersistenceError(f"Could not create friends schema: {e}") from e

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False) -> "SqlFriendRepository":
        return cls(make_engine(url, echo=echo))

    @property
    def engine(self) -> Engine:
        return self._engine

    def list_all(self) -> list[Friend]:
        stmt = select(friends_table).order_by(
            friends_table.c.sort_order, friends_table.c.date_added
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read friends: {e}") from e
        return [_row_to_friend(row) for row in rows]

    def save(self, friends: Sequence[Friend], *, deleted_ids: Iterable[str] = ()) -> None:
        deleted_ids = list(deleted_ids)
        rows = [_friend_to_row(f) for f in friends]
        if not rows and not deleted_ids:
            return
        try:
            # begin() commits on success and rolls back on any exception.
            with self._engine.begin() as conn:
                if deleted_ids:
                    conn.execute(
                        delete(friends_table).where(friends_table.c.id.in_(deleted_ids))
                    )
                if rows:
                    self._upsert(conn, rows)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not save friends: {e}") from e
        logger.debug("Saved %d friend(s), deleted %d", len(rows), len(deleted_ids))

    def _upsert(self, conn, rows: list[dict]) -> None:
        if self._dialect in ("sqlite", "postgresql"):
            insert = sqlite_insert if self._dialect == "sqlite" else pg_insert
            stmt = insert(friends_table)
            stmt = stmt.on_conflict_do_update(
                index_elements=[friends_table.c.id],
                set_={col: stmt.excluded[col] for col in _UPDATABLE_COLUMNS},
            )
            conn.execute(stmt, rows)
            return
        # Other backends: replace the rows wholesale inside the same transaction.
        ids = [row["id"] for row in rows]
        conn.execute(delete(friends_table).where(friends_table.c.id.in_(ids)))
        conn.execute(friends_table.insert(), rows)
