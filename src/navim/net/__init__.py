# =============================================================================
# Network Module
# =============================================================================
# Everything that talks to the web:
#   - HttpClient: page and image fetching (requests)
#   - BraveSearch: search results scraping
#
# All calls are blocking; the UI runs them in worker threads.
# =============================================================================

from navim.net.client import FetchError, HttpClient
from navim.net.search import BraveSearch, SearchError

__all__ = ["BraveSearch", "FetchError", "HttpClient", "SearchError"]
