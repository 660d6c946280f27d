# =============================================================================
# Search Result Model
# =============================================================================

from dataclasses import dataclass


@dataclass
class SearchResult:
    """
    A single search hit.

    Attributes:
        title: Result title as shown by the search engine.
        url: Absolute URL of the result page.
        display_url: Short, human-readable form of the URL.
        description: Snippet text below the title.
    """
    title: str
    url: str
    display_url: str = ""
    description: str = ""
