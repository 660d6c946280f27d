# =============================================================================
# Storage Module
# =============================================================================
# Persistent browsing history in SQLite (via aiosqlite).
#
# The database is stored in the XDG data directory (~/.local/share/navim/).
# =============================================================================

from navim.storage.database import Database
from navim.storage.repository import HistoryRepository

__all__ = ["Database", "HistoryRepository"]
