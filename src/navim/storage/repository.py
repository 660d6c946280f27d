# =============================================================================
# History Repository - Data Access Layer
# =============================================================================
# Converts between HistoryEntry objects and rows of the history table.
# Only the newest `max_entries` rows are kept; older ones are pruned on
# every insert.
# =============================================================================

from datetime import datetime
from typing import TYPE_CHECKING

from navim.core import HistoryEntry

if TYPE_CHECKING:
    from navim.storage.database import Database


class HistoryRepository:
    """
    Data access for browsing history.

    Usage:
        >>> repo = HistoryRepository(database)
        >>> await repo.add_entry(HistoryEntry(query="q", title="t", url="u"))
        >>> entries = await repo.get_entries()

    Attributes:
        db: Database instance for executing queries.
        max_entries: Number of entries kept.
    """

    def __init__(self, db: "Database", max_entries: int = 100) -> None:
        self.db = db
        self.max_entries = max_entries

    async def add_entry(self, entry: HistoryEntry) -> HistoryEntry:
        """
        Record a visited page and prune old entries.

        Returns:
            The entry with its ID populated.
        """
        cursor = await self.db.conn.execute(
            """INSERT INTO history (query, title, url, visited_at)
               VALUES (?, ?, ?, ?)""",
            (entry.query, entry.title, entry.url, entry.visited_at.isoformat())
        )
        entry.id = cursor.lastrowid

        await self.db.conn.execute(
            """DELETE FROM history WHERE id NOT IN (
                   SELECT id FROM history
                   ORDER BY visited_at DESC, id DESC
                   LIMIT ?
               )""",
            (self.max_entries,)
        )
        await self.db.conn.commit()
        return entry

    async def get_entries(self, limit: int | None = None) -> list[HistoryEntry]:
        """
        Get history entries, newest first.

        Args:
            limit: Maximum number of entries (default: all kept entries).
        """
        async with self.db.conn.execute(
            """SELECT id, query, title, url, visited_at FROM history
               ORDER BY visited_at DESC, id DESC
               LIMIT ?""",
            (limit if limit is not None else self.max_entries,)
        ) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def count(self) -> int:
        """Number of stored entries."""
        async with self.db.conn.execute("SELECT COUNT(*) FROM history") as cursor:
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def clear(self) -> None:
        """Delete all history."""
        await self.db.conn.execute("DELETE FROM history")
        await self.db.conn.commit()

    def _row_to_entry(self, row) -> HistoryEntry:
        """Convert a database row to a HistoryEntry object."""
        return HistoryEntry(
            id=row[0],
            query=row[1],
            title=row[2],
            url=row[3],
            visited_at=datetime.fromisoformat(row[4]),
        )
