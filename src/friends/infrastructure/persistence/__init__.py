"""Durable FriendRepository adapters: SQLAlchemy (local SQLite) and Neo4j."""
