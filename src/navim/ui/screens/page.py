# =============================================================================
# Page Screen
# =============================================================================
# Full-screen reader for one web page.
#
# Fetching and rendering block on the network (the page itself plus up to a
# few images), so both run in a thread worker. The screen shows "Loading..."
# until the worker hands the result back to the event loop. If the user
# leaves before that, the worker is cancelled and its result discarded.
# =============================================================================

import logging
from typing import TYPE_CHECKING

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Static
from textual.worker import get_current_worker

from navim.core import truncate_string
from navim.net import FetchError
from navim.rendering import RenderResult
from navim.ui.widgets import PageView
from navim.ui.widgets.result_list import escape

if TYPE_CHECKING:
    from navim.app import NavimApp

logger = logging.getLogger(__name__)

PAGE_STEP = 20


class PageScreen(Screen):
    """
    Displays a rendered page.

    Keybindings:
        - j/k or arrows: Scroll one line
        - Space/d, b/u: Page down / up
        - g/G: Top / bottom
        - q, Esc, h or Left: Back
    """

    BINDINGS = [
        Binding("j", "scroll_lines(1)", "Down", show=False),
        Binding("down", "scroll_lines(1)", "Down", show=False),
        Binding("k", "scroll_lines(-1)", "Up", show=False),
        Binding("up", "scroll_lines(-1)", "Up", show=False),
        Binding("space", f"scroll_lines({PAGE_STEP})", "Page Down"),
        Binding("d", f"scroll_lines({PAGE_STEP})", "Page Down", show=False),
        Binding("pagedown", f"scroll_lines({PAGE_STEP})", "Page Down", show=False),
        Binding("b", f"scroll_lines(-{PAGE_STEP})", "Page Up"),
        Binding("u", f"scroll_lines(-{PAGE_STEP})", "Page Up", show=False),
        Binding("pageup", f"scroll_lines(-{PAGE_STEP})", "Page Up", show=False),
        Binding("g", "top", "Top"),
        Binding("home", "top", "Top", show=False),
        Binding("G", "bottom", "Bottom"),
        Binding("end", "bottom", "Bottom", show=False),
        Binding("q", "back", "Back"),
        Binding("escape", "back", "Back", show=False),
        Binding("h", "back", "Back", show=False),
        Binding("left", "back", "Back", show=False),
    ]

    CSS = """
    #page-header {
        height: auto;
        padding: 0 1;
        background: $primary-background;
        border-bottom: solid $primary;
    }
    """

    def __init__(self, title: str, url: str) -> None:
        """
        Initialize the page screen.

        Args:
            title: Page title (from the search result or history).
            url: Page URL.
        """
        super().__init__()
        self.page_title = title
        self.page_url = url

    @property
    def navim(self) -> "NavimApp":
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            f"[bold black on green] READING [/]  "
            f"[bold yellow]{escape(truncate_string(self.page_title, 50))}[/]\n"
            f"[dim]{escape(truncate_string(self.page_url, 60))}[/]",
            id="page-header",
        )
        yield PageView(id="page-view")
        yield Footer()

    def on_mount(self) -> None:
        self.load_page()

    @work(thread=True, exclusive=True)
    def load_page(self) -> None:
        """Fetch and render the page off the event loop."""
        worker = get_current_worker()
        try:
            html, final_url = self.navim.client.fetch_page(self.page_url)
            result = self.navim.engine.render_html(html, base_url=final_url)
        except FetchError as e:
            logger.warning(f"Page load failed: {e}")
            result = RenderResult(text="Failed to load page.", error=str(e))

        if not worker.is_cancelled:
            self.app.call_from_thread(self._show_result, result)

    def _show_result(self, result: RenderResult) -> None:
        view = self.query_one("#page-view", PageView)
        view.show_text(result.text)
        self.sub_title = f"{view.line_count} lines, {result.image_count} images"
        if result.error:
            self.notify(result.error, severity="error", timeout=5)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_scroll_lines(self, amount: int) -> None:
        view = self.query_one("#page-view", PageView)
        view.scroll_to(y=view.scroll_y + amount, animate=False)

    def action_top(self) -> None:
        self.query_one("#page-view", PageView).scroll_home(animate=False)

    def action_bottom(self) -> None:
        self.query_one("#page-view", PageView).scroll_end(animate=False)

    def action_back(self) -> None:
        self.workers.cancel_all()
        self.app.pop_screen()
