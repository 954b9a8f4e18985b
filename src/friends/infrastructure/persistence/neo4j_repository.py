"""Neo4j implementation of FriendRepository.
Graph: (owner:Owner {id: owner_id})-[:HAS_FRIEND]->(f:Friend {...}).
Friends are scoped by owner_id so several local profiles can share one database.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from neo4j.exceptions import DriverError, Neo4jError

from friends.application.errors import PersistenceError
from friends.domain import Friend

logger = logging.getLogger(__name__)

_LIST_QUERY = """
MATCH (:Owner {id: $owner_id})-[:HAS_FRIEND]->(f:Friend)
RETURN f
ORDER BY f.sort_order, f.date_added
"""

_DELETE_QUERY = """
MATCH (:Owner {id: $owner_id})-[:HAS_FRIEND]->(f:Friend)
WHERE f.id IN $ids
DETACH DELETE f
"""

_UPSERT_QUERY = """
MERGE (owner:Owner {id: $owner_id})
WITH owner
UNWIND $rows AS row
MERGE (f:Friend {id: row.id})
SET f.name = row.name,
    f.photo = row.photo,
    f.phone_number = row.phone_number,
    f.notes = row.notes,
    f.is_favorite = row.is_favorite,
    f.date_added = row.date_added,
    f.sort_order = row.sort_order
MERGE (owner)-[:HAS_FRIEND]->(f)
"""

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT friend_id_unique IF NOT EXISTS
FOR (f:Friend) REQUIRE f.id IS UNIQUE
"""


def _datetime_to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def _iso_to_datetime(s: str) -> datetime:
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _friend_to_row(friend: Friend) -> dict:
    return {
        "id": friend.id,
        "name": friend.name,
        "photo": friend.photo,
        "phone_number": friend.phone_number or "",
        "notes": friend.notes or "",
        "is_favorite": friend.is_favorite,
        "date_added": _datetime_to_iso(friend.date_added),
        "sort_order": friend.sort_order,
    }


def _record_to_friend(record) -> Friend:
    f = record["f"]
    photo = f.get("photo")
    return Friend(
        id=f["id"],
        name=f.get("name") or "",
        photo=bytes(photo) if photo is not None else None,
        phone_number=f.get("phone_number") or "",
        notes=f.get("notes") or "",
        is_favorite=bool(f.get("is_favorite", False)),
        date_added=_iso_to_datetime(f["date_added"]),
        sort_order=int(f.get("sort_order", 0)),
    )


def ensure_friend_constraint(driver) -> None:
    """Create unique constraint on Friend(id) if missing."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


class Neo4jFriendRepository:
    """Stores friends as Friend nodes linked to an Owner node.
    Each save is one write transaction; a failure rolls the whole batch back.
    """

    def __init__(self, driver: object, owner_id: str = "default") -> None:
        self._driver = driver
        self._owner_id = owner_id

    def list_all(self) -> list[Friend]:
        try:
            with self._driver.session() as session:
                result = session.run(_LIST_QUERY, owner_id=self._owner_id)
                return [_record_to_friend(rec) for rec in result]
        except (Neo4jError, DriverError) as e:
            raise PersistenceError(f"Could not read friends: {e}") from e

    def save(self, friends: Sequence[Friend], *, deleted_ids: Iterable[str] = ()) -> None:
        deleted_ids = list(deleted_ids)
        rows = [_friend_to_row(f) for f in friends]
        if not rows and not deleted_ids:
            return
        try:
            with self._driver.session() as session:
                # Explicit transaction: managed write functions would retry on their own.
                with session.begin_transaction() as tx:
                    if deleted_ids:
                        tx.run(_DELETE_QUERY, owner_id=self._owner_id, ids=deleted_ids)
                    if rows:
                        tx.run(_UPSERT_QUERY, owner_id=self._owner_id, rows=rows)
                    tx.commit()
        except (Neo4jError, DriverError) as e:
            raise PersistenceError(f"Could not save friends: {e}") from e
        logger.debug("Saved %d friend(s), deleted %d", len(rows), len(deleted_ids))
