# =============================================================================
# UI Module
# =============================================================================
# Textual-based user interface for Navim.
#
# Structure:
#   - screens/: Full-screen views (results, page reader, history, about)
#   - widgets/: Reusable UI components (link list, page view)
# =============================================================================

from navim.ui.screens import AboutScreen, HistoryScreen, PageScreen, ResultsScreen
from navim.ui.widgets import LinkItem, LinkList, PageView

__all__ = [
    "AboutScreen",
    "HistoryScreen",
    "PageScreen",
    "ResultsScreen",
    "LinkItem",
    "LinkList",
    "PageView",
]
