# =============================================================================
# HTTP Client
# =============================================================================
# Fetches pages and images with browser-like headers.
#
# Pages:  fetch_page() raises FetchError on any failure.
# Images: fetch_image() never raises. It returns None unless the response is
#         a real raster image (image/*, not SVG or GIF) of a plausible size,
#         which keeps tracking pixels out of the renderer.
# =============================================================================

import logging
from typing import TYPE_CHECKING

import requests

from navim.rendering.admission import is_admissible_response

if TYPE_CHECKING:
    from navim.config import NetworkConfig

logger = logging.getLogger(__name__)

PAGE_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
IMAGE_ACCEPT = "image/avif,image/webp,image/apng,image/*,*/*;q=0.8"
ACCEPT_LANGUAGE = "en-US,en;q=0.5"


class FetchError(Exception):
    """Raised when a page can't be fetched."""
    pass


class HttpClient:
    """
    Thin wrapper around a requests Session.

    Usage:
        >>> client = HttpClient(config.network)
        >>> html, url = client.fetch_page("https://example.com")
        >>> data = client.fetch_image("https://example.com/photo.jpg")

    Attributes:
        config: Network configuration (timeouts, user agent).
        min_image_bytes: Smallest image body accepted.
        session: Shared HTTP session.
    """

    def __init__(
        self,
        config: "NetworkConfig",
        min_image_bytes: int = 1000,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self.min_image_bytes = min_image_bytes
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": config.user_agent,
            "Accept-Language": ACCEPT_LANGUAGE,
        })

    def get(self, url: str, params: dict | None = None) -> requests.Response:
        """
        GET an HTML document.

        Raises:
            FetchError: On network errors, timeouts and non-2xx responses.
        """
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Accept": PAGE_ACCEPT},
                timeout=self.config.page_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Fetch failed for {url}: {e}")
            raise FetchError(f"Failed to fetch {url}: {e}") from e
        return response

    def fetch_page(self, url: str) -> tuple[str, str]:
        """
        Fetch a page.

        Returns:
            Tuple of (html, final URL after redirects).

        Raises:
            FetchError: If the page can't be retrieved.
        """
        response = self.get(url)
        logger.debug(f"Fetched {response.url} ({len(response.content)} bytes)")
        return response.text, response.url

    def fetch_image(self, url: str) -> bytes | None:
        """
        Fetch an image for conversion.

        Returns:
            The image bytes, or None if the request failed or the response
            isn't an admissible image.
        """
        try:
            response = self.session.get(
                url,
                headers={"Accept": IMAGE_ACCEPT},
                timeout=self.config.image_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.debug(f"Image request failed for {url}: {e}")
            return None

        content_type = response.headers.get("Content-Type", "")
        data = response.content
        if not is_admissible_response(content_type, len(data), self.min_image_bytes):
            logger.debug(
                f"Image response rejected for {url}: {content_type!r}, {len(data)} bytes"
            )
            return None
        return data

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
