# =============================================================================
# History Screen
# =============================================================================
# Lists previously visited pages, newest first. Opening an entry goes
# straight to the page reader without recording a new visit.
# =============================================================================

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, ListView, Static

from navim.core import HistoryEntry
from navim.ui.screens.page import PageScreen
from navim.ui.widgets import LinkItem, LinkList


class HistoryScreen(Screen):
    """Browsing history list."""

    BINDINGS = [
        Binding("l", "open", "Open"),
        Binding("right", "open", "Open", show=False),
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
    ]

    CSS = """
    #history-header {
        height: auto;
        padding: 0 1;
        border-bottom: solid $primary;
    }
    """

    def __init__(self, entries: list[HistoryEntry]) -> None:
        super().__init__()
        self.entries = entries

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            f"[bold]History[/]  [dim]({len(self.entries)} entries)[/]",
            id="history-header",
        )
        yield LinkList(
            *[
                LinkItem(
                    e.title,
                    e.url,
                    e.url,
                    f"{e.display_time}  query: {e.query}",
                    query=e.query,
                )
                for e in self.entries
            ],
            id="history-list",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#history-list", LinkList).focus()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, LinkItem):
            self.app.push_screen(PageScreen(event.item.link_title, event.item.link_url))

    def action_open(self) -> None:
        item = self.query_one("#history-list", LinkList).current
        if item is not None:
            self.app.push_screen(PageScreen(item.link_title, item.link_url))

    def action_quit(self) -> None:
        self.app.exit()
