"""Relational schema for the local friends store.

One row per friend. The photo is kept inline as a BLOB; friend lists are small
and photos are only read when a card is shown.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

friends_table = Table(
    "friends",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(500), nullable=False),
    Column("photo", LargeBinary, nullable=True),
    Column("phone_number", String(64), nullable=False, default=""),
    Column("notes", Text, nullable=False, default=""),
    Column("is_favorite", Boolean, nullable=False, default=False),
    Column("date_added", DateTime(timezone=True), nullable=False),
    # Not unique: a reorder rewrites several rows and may pass through duplicates
    # inside its transaction.
    Column("sort_order", Integer, nullable=False, index=True),
    CheckConstraint("sort_order >= 0", name="non_negative_sort_order"),
)
