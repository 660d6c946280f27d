# =============================================================================
# History Entry Model
# =============================================================================
# One row of browsing history: which page was opened, and from which query.
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class HistoryEntry:
    """
    A visited page.

    Attributes:
        query: The search query that produced the result.
        title: Page title (from the search result).
        url: Page URL.
        visited_at: Local time the page was opened.
        id: Database primary key. None until saved.
    """
    query: str
    title: str
    url: str
    visited_at: datetime = field(default_factory=datetime.now)
    id: int | None = None

    @property
    def display_time(self) -> str:
        """Timestamp formatted for the history list."""
        return self.visited_at.strftime("%Y-%m-%d %H:%M")
