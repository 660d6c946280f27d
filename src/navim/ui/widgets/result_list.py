# =============================================================================
# Result List Widget
# =============================================================================
# A vertical list of links: search results or history entries. Every item
# shows a bold title, a URL line and a dimmed detail line.
# =============================================================================

from textual.binding import Binding
from textual.widgets import ListItem, ListView, Static

from navim.core import truncate_string


def escape(text: str) -> str:
    """Escape Rich markup characters in user content."""
    if not text:
        return ""
    return text.replace("[", "\\[")


class LinkItem(ListItem):
    """
    One entry of a LinkList.

    Attributes:
        link_title: Link title.
        link_url: Target URL.
        link_query: Search query the link came from.
    """

    DEFAULT_CSS = """
    LinkItem {
        padding: 0 1 1 1;
    }
    """

    def __init__(self, title: str, url: str, subtitle: str, detail: str, query: str = "") -> None:
        lines = [
            f"[bold green]{escape(truncate_string(title, 70))}[/]",
            f"[cyan]{escape(truncate_string(subtitle, 60))}[/]",
        ]
        if detail:
            lines.append(escape(truncate_string(detail, 80)))
        super().__init__(Static("\n".join(lines)))
        self.link_title = title
        self.link_url = url
        self.link_query = query


class LinkList(ListView):
    """
    ListView with vim-style navigation.

    Enter selects (ListView.Selected); j/k move the cursor.
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("g", "first", "Top", show=False),
        Binding("G", "last", "Bottom", show=False),
    ]

    def action_first(self) -> None:
        if self.children:
            self.index = 0

    def action_last(self) -> None:
        if self.children:
            self.index = len(self.children) - 1

    @property
    def current(self) -> LinkItem | None:
        """The highlighted item, if any."""
        item = self.highlighted_child
        return item if isinstance(item, LinkItem) else None
