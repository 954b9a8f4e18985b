"""Run: python -m friends (from repo root, with .env or env vars set)."""

from friends.cli import main

if __name__ == "__main__":
    main()
