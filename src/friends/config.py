"""Settings from environment (and .env), plus wiring of the store for a session."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from friends.application import FriendRepository, FriendService, FriendStore
from friends.infrastructure import (
    InMemoryFriendRepository,
    Neo4jFriendRepository,
    SqlFriendRepository,
    ensure_friend_constraint,
    phone_normalizer,
)

logger = logging.getLogger(__name__)

# Repo root: from src/friends/config.py go up to repo root.
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent

STORAGE_BACKENDS = ("sqlite", "memory", "neo4j")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    storage: str = "sqlite"
    db_url: str = "sqlite:///friends.db"
    auto_flush: bool = True
    default_region: str | None = None
    log_level: str = "INFO"
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    owner_id: str = "default"


def load_env() -> None:
    """Load .env from repo root or current dir, without overriding real env vars."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r}).")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environ (defaults to os.environ after loading .env)."""
    if environ is None:
        load_env()
        environ = os.environ
    storage = environ.get("FRIENDS_STORAGE", "sqlite").strip().lower()
    if storage not in STORAGE_BACKENDS:
        raise ValueError(
            f"FRIENDS_STORAGE must be one of {', '.join(STORAGE_BACKENDS)} (got {storage!r})."
        )
    log_level = environ.get("FRIENDS_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"FRIENDS_LOG_LEVEL is not a logging level (got {log_level!r}).")
    region = environ.get("FRIENDS_DEFAULT_REGION", "").strip().upper() or None
    return Settings(
        storage=storage,
        db_url=environ.get("FRIENDS_DB_URL", "sqlite:///friends.db").strip(),
        auto_flush=_parse_bool("FRIENDS_AUTO_FLUSH", environ.get("FRIENDS_AUTO_FLUSH", "true")),
        default_region=region,
        log_level=log_level,
        neo4j_uri=environ.get("NEO4J_URI", "bolt://localhost:7687").strip(),
        neo4j_user=environ.get("NEO4J_USER", "neo4j").strip(),
        neo4j_password=environ.get("NEO4J_PASSWORD", "password").strip(),
        owner_id=environ.get("FRIENDS_OWNER_ID", "default").strip() or "default",
    )


def build_repository(settings: Settings) -> FriendRepository:
    if settings.storage == "memory":
        return InMemoryFriendRepository()
    if settings.storage == "neo4j":
        from neo4j import GraphDatabase

        driver = GraphDatabase.driver(
            settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
        )
        ensure_friend_constraint(driver)
        return Neo4jFriendRepository(driver, owner_id=settings.owner_id)
    return SqlFriendRepository.from_url(settings.db_url)


def build_store(settings: Settings) -> FriendStore:
    repo = build_repository(settings)
    logger.info("Using %s storage (auto_flush=%s)", settings.storage, settings.auto_flush)
    return FriendStore(repo, auto_flush=settings.auto_flush)


def build_service(settings: Settings) -> FriendService:
    return FriendService(
        build_store(settings),
        normalize_phone=phone_normalizer(settings.default_region),
    )
