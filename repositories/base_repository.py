"""
Base repository with common database operations.
"""

import logging
import sqlite3
from abc import ABC
from contextlib import contextmanager

from infrastructure.schema_manager import SchemaManager

logger = logging.getLogger("league_bot.repositories")


class BaseRepository(ABC):
    """
    Base class for all repositories.

    Provides common database connection management and utilities.
    """

    # DB paths whose schema has already been created/migrated in this process
    _schema_initialized_paths = set()

    def __init__(self, db_path: str):
        """
        Initialize repository with database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        if db_path not in BaseRepository._schema_initialized_paths:
            SchemaManager(db_path).initialize()
            BaseRepository._schema_initialized_paths.add(db_path)

    @staticmethod
    def normalize_guild_id(guild_id: int | None) -> int:
        """
        Normalize guild_id for database storage.

        None (DMs, tests, global defaults) is stored as 0.
        """
        return guild_id if guild_id is not None else 0

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory enabled."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=5000")
        return conn

    @contextmanager
    def connection(self):
        """
        Context manager for database connections.

        Commits on success, rolls back on exception, always closes.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def atomic_transaction(self):
        """
        Context manager for atomic transactions with immediate write lock.

        BEGIN IMMEDIATE takes the write lock up front so that a
        read-check-write sequence (e.g. a version check followed by a slot
        rewrite) cannot interleave with another writer.

        Usage:
            with self.atomic_transaction() as conn:
                cursor = conn.cursor()
                cursor.execute(...)

        The transaction commits on success and rolls back on exception.
        """
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
