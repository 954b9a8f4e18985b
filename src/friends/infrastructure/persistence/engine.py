"""SQLAlchemy engine factory with SQLite tuning for a local, single-user store."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import StaticPool

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}


def is_sqlite(url: str | URL) -> bool:
    return make_url(str(url)).get_backend_name() in SQLITE_NAMES


def _is_memory_sqlite(url: URL) -> bool:
    return url.get_backend_name() in SQLITE_NAMES and url.database in (None, "", ":memory:")


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create an Engine for url.

    SQLite connections get ``journal_mode=WAL`` (so ``synchronous=NORMAL``
    stays crash-safe) and ``temp_store=MEMORY``;
    in-memory SQLite shares one connection so every session sees the same data.
    """
    u = make_url(str(url))
    if _is_memory_sqlite(u):
        engine = create_engine(
            u,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(u, echo=echo)

    if u.get_backend_name() in SQLITE_NAMES:

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.execute("PRAGMA temp_store=MEMORY")
            finally:
                cursor.close()

    return engine
