# =============================================================================
# Results Screen
# =============================================================================
# Lists the search results for the query given on the command line.
# Selecting a result records it in history and opens the page reader.
# =============================================================================

import logging
from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, ListView, Static

from navim.core import SearchResult
from navim.ui.screens.page import PageScreen
from navim.ui.widgets import LinkItem, LinkList
from navim.ui.widgets.result_list import escape

if TYPE_CHECKING:
    from navim.app import NavimApp

logger = logging.getLogger(__name__)


class ResultsScreen(Screen):
    """
    Search results list.

    Keybindings:
        - j/k or arrows: Move selection
        - Enter, l or Right: Open result
        - q or Esc: Quit
    """

    BINDINGS = [
        Binding("l", "open", "Open"),
        Binding("right", "open", "Open", show=False),
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
    ]

    CSS = """
    #results-header {
        height: auto;
        padding: 0 1;
        border-bottom: solid $primary;
    }
    """

    def __init__(self, query: str, results: list[SearchResult]) -> None:
        super().__init__()
        self.search_query = query
        self.results = results

    @property
    def navim(self) -> "NavimApp":
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            f"[bold]Results for:[/] [yellow]{escape(self.search_query)}[/]  "
            f"[dim]({len(self.results)} found)[/]",
            id="results-header",
        )
        yield LinkList(
            *[
                LinkItem(
                    r.title,
                    r.url,
                    r.display_url or r.url,
                    r.description,
                    query=self.search_query,
                )
                for r in self.results
            ],
            id="results-list",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#results-list", LinkList).focus()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, LinkItem):
            self._open(event.item)

    def action_open(self) -> None:
        item = self.query_one("#results-list", LinkList).current
        if item is not None:
            self._open(item)

    def action_quit(self) -> None:
        self.app.exit()

    def _open(self, item: LinkItem) -> None:
        logger.info(f"Opening result: {item.link_url}")
        self.run_worker(
            self.navim.record_visit(item.link_query, item.link_title, item.link_url),
            exclusive=False,
        )
        self.app.push_screen(PageScreen(item.link_title, item.link_url))
