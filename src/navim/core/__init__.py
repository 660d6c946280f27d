# =============================================================================
# Navim Core Module
# =============================================================================
# Core domain models for Navim. These are plain Python dataclasses and string
# helpers with no external dependencies, so they can be imported from the
# rendering, network, storage and UI layers alike.
#
#   - SearchResult: One hit from the search page
#   - HistoryEntry: A page the user opened, with the query that led to it
# =============================================================================

from navim.core.history import HistoryEntry
from navim.core.result import SearchResult
from navim.core.strings import sanitize_display, truncate_string

__all__ = [
    "HistoryEntry",
    "SearchResult",
    "sanitize_display",
    "truncate_string",
]
