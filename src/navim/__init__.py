# =============================================================================
# Navim: A Vim-Style Terminal Web Browser
# =============================================================================
#
# Navim searches the web from the command line and renders the pages you
# open as plain text inside the terminal: headings, lists, tables, code
# blocks, quotes and even a few images drawn as ASCII art.
#
# Features:
#   - Brave Search results list
#   - HTML-to-text rendering of the page's main content
#   - ASCII art image rendering
#   - Browsing history in SQLite
#   - XDG Base Directory compliant
#
# =============================================================================

__version__ = "1.3.0"
__app_name__ = "navim"

BANNER = r"""                    _
  _ __   __ ___   _(_)_ __ ___
 | '_ \ / _` \ \ / / | '_ ` _ \
 | | | | (_| |\ V /| | | | | | |
 |_| |_|\__,_| \_/ |_|_| |_| |_|"""

# Main entry point - this is what gets called by the 'navim' command
from navim.app import main

__all__ = ["main", "BANNER", "__version__", "__app_name__"]
