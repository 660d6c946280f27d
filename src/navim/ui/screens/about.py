# =============================================================================
# About Screen
# =============================================================================

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Static

from navim import BANNER, __version__

ABOUT_TEXT = f"""\
[bold yellow]Terminal Web Browser[/]
[dim]Version {__version__}[/]

A vim-style terminal browser for searching and reading the web.

[bold green]FEATURES[/]
  - Keyboard navigation (arrows or hjkl)
  - In-terminal web page rendering
  - ASCII art image rendering
  - Brave Search backend
  - No tracking, no cookies, no JavaScript

[bold green]KEYBINDINGS[/]
  ↑/↓ or j/k     Navigate / Scroll
  Enter or →     Open selected result
  ← or Esc       Go back
  Space / b      Page down / up
  g / G          Jump to top / bottom
  q              Quit

[bold green]LICENSE[/]
  MIT License
"""


class AboutScreen(Screen):
    """Static information about Navim."""

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("j", "scroll_down", "Down", show=False),
        Binding("k", "scroll_up", "Up", show=False),
    ]

    CSS = """
    #about-banner {
        color: $accent;
        text-style: bold;
        padding: 1 2 0 2;
        border-bottom: solid $primary;
    }

    #about-body {
        padding: 1 2;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static(BANNER, id="about-banner", markup=False)
        with VerticalScroll(id="about-scroll"):
            yield Static(ABOUT_TEXT, id="about-body")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#about-scroll", VerticalScroll).focus()

    def action_scroll_down(self) -> None:
        self.query_one("#about-scroll", VerticalScroll).scroll_down(animate=False)

    def action_scroll_up(self) -> None:
        self.query_one("#about-scroll", VerticalScroll).scroll_up(animate=False)

    def action_quit(self) -> None:
        self.app.exit()
