# =============================================================================
# UI Widgets
# =============================================================================
# Reusable UI components for Navim:
#   - LinkList: Keyboard-navigable list of results / history entries
#   - PageView: Scrollable rendered page text
# =============================================================================

from navim.ui.widgets.page_view import PageView
from navim.ui.widgets.result_list import LinkItem, LinkList

__all__ = ["LinkItem", "LinkList", "PageView"]
