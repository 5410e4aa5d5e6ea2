"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; pin test values before anything imports accounts.config
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
