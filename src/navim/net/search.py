# =============================================================================
# Web Search
# =============================================================================
# Scrapes the Brave Search results page. No API key is needed; the trade-off
# is that the markup can change without notice, in which case we just find
# fewer (or no) results.
# =============================================================================

import logging
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag

from navim.core import SearchResult, sanitize_display
from navim.net.client import FetchError

if TYPE_CHECKING:
    from navim.config import SearchConfig
    from navim.net.client import HttpClient

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Raised when the search page can't be fetched."""
    pass


class BraveSearch:
    """
    Search backend built on the Brave Search HTML page.

    Usage:
        >>> search = BraveSearch(client, config.search)
        >>> results = search.search("rust programming")
    """

    SNIPPET = "div.snippet"
    TITLE = ".title"
    LINK = "a.heading-serpresult, a[href]"
    DISPLAY_URL = ".snippet-url"
    DESCRIPTION = ".snippet-description, .generic-snippet"

    def __init__(self, client: "HttpClient", config: "SearchConfig") -> None:
        self.client = client
        self.config = config

    def search(self, query: str) -> list[SearchResult]:
        """
        Run a query.

        Returns:
            Up to config.max_results results, in page order.

        Raises:
            SearchError: If the results page can't be fetched.
        """
        try:
            response = self.client.get(self.config.endpoint, params={"q": query})
        except FetchError as e:
            raise SearchError(str(e)) from e

        results = self.parse_results(response.text)
        logger.info(f"Search {query!r}: {len(results)} results")
        return results

    def parse_results(self, html: str) -> list[SearchResult]:
        """Extract results from a results page."""
        soup = BeautifulSoup(html, "lxml")
        results = []

        for snippet in soup.select(self.SNIPPET):
            result = self._parse_snippet(snippet)
            if result is not None:
                results.append(result)
            if len(results) >= self.config.max_results:
                break

        return results

    def _parse_snippet(self, snippet: Tag) -> SearchResult | None:
        title_el = snippet.select_one(self.TITLE)
        title = sanitize_display(title_el.get_text()) if title_el else ""

        url = ""
        for link in snippet.select(self.LINK):
            href = link.get("href")
            if isinstance(href, str) and href.startswith("http"):
                url = href
                break

        if not title or not url:
            return None

        display_url = ""
        url_el = snippet.select_one(self.DISPLAY_URL)
        if url_el:
            parts = url_el.get_text().replace("›", "/").split()
            display_url = parts[0] if parts else ""

        desc_el = snippet.select_one(self.DESCRIPTION)
        description = sanitize_display(desc_el.get_text()) if desc_el else ""

        return SearchResult(
            title=title,
            url=url,
            display_url=display_url,
            description=description,
        )
