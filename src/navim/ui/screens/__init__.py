# =============================================================================
# UI Screens
# =============================================================================
# Full-screen views for the application.
#
# The app shows one screen at a time; the page reader is pushed on top of
# the results or history list and popped when the user goes back.
#
# Screens:
#   - ResultsScreen: Search results for the command-line query
#   - PageScreen: Rendered page reader
#   - HistoryScreen: Previously visited pages
#   - AboutScreen: Version, features and keybindings
# =============================================================================

from navim.ui.screens.about import AboutScreen
from navim.ui.screens.history import HistoryScreen
from navim.ui.screens.page import PageScreen
from navim.ui.screens.results import ResultsScreen

__all__ = ["AboutScreen", "HistoryScreen", "PageScreen", "ResultsScreen"]
