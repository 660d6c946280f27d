# =============================================================================
# Database Connection and Schema Management
# =============================================================================
# Manages the SQLite database that holds browsing history.
#
# Schema overview:
#   - schema_version: Single-row version marker for migrations
#   - history: Opened pages, newest first by visited_at
#
# Uses aiosqlite so the Textual event loop never blocks on disk I/O.
# =============================================================================

from pathlib import Path

import aiosqlite

from navim.config import Config


# Current schema version - increment when making schema changes
SCHEMA_VERSION = 1


class Database:
    """
    Manages the SQLite database connection and schema.

    Usage:
        >>> db = Database()
        >>> await db.connect()
        >>> await db.conn.execute("SELECT ...")
        >>> await db.close()

    Attributes:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        """
        Initialize the database manager.

        Args:
            db_path: Path to database file. Defaults to XDG data location.
        """
        self.db_path = db_path or Config.database_path()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """
        Open the database connection and ensure schema is up to date.

        Creates the database file if it doesn't exist.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self.db_path)
        await self._init_schema()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def conn(self) -> aiosqlite.Connection:
        """
        Get the active database connection.

        Raises:
            RuntimeError: If not connected.
        """
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def _init_schema(self) -> None:
        """Create tables if they don't exist, run migrations if needed."""
        try:
            async with self.conn.execute(
                "SELECT version FROM schema_version"
            ) as cursor:
                row = await cursor.fetchone()
                current_version = row[0] if row else 0
        except aiosqlite.OperationalError:
            # Table doesn't exist, this is a fresh database
            current_version = 0

        if current_version < SCHEMA_VERSION:
            await self._create_schema()

    async def _create_schema(self) -> None:
        """Create the database schema from scratch."""
        schema = """
        -- Schema version tracking
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY
        );

        -- Opened pages
        CREATE TABLE IF NOT EXISTS history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            query TEXT NOT NULL,
            title TEXT NOT NULL,
            url TEXT NOT NULL,
            visited_at TEXT NOT NULL  -- ISO 8601, local time
        );

        CREATE INDEX IF NOT EXISTS idx_history_visited ON history(visited_at DESC);
        """

        await self.conn.executescript(schema)
        await self.conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,)
        )
        await self.conn.commit()
