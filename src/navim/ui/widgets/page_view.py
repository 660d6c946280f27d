# =============================================================================
# Page View Widget
# =============================================================================
# Scrollable display of a rendered page.
#
# The rendered text is shown verbatim (no Rich markup), so brackets and
# box-drawing characters from the renderer come through untouched.
# =============================================================================

from textual.app import ComposeResult
from textual.containers import ScrollableContainer
from textual.widgets import Static


class PageView(ScrollableContainer):
    """
    A widget for displaying rendered page text.

    Usage:
        >>> view = PageView()
        >>> view.show_text(result.text)
    """

    DEFAULT_CSS = """
    PageView {
        padding: 0 1;
    }

    PageView > #page-body {
        width: 100%;
        height: auto;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.line_count = 0

    def compose(self) -> ComposeResult:
        yield Static("Loading...", id="page-body", markup=False)

    def show_text(self, text: str) -> None:
        """Replace the displayed text and scroll back to the top."""
        self.line_count = text.count("\n") + 1
        self.query_one("#page-body", Static).update(text)
        self.scroll_home(animate=False)
