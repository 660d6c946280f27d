# =============================================================================
# Rendering Engine
# =============================================================================
# Coordinates page rendering.
#
# This is the main entry point for the rendering module. It:
#   - Pre-cleans and parses the page HTML (BeautifulSoup + lxml)
#   - Selects the main-content subtree
#   - Renders it to text, with up to a few images as character art
#   - Never raises: failures come back as a RenderResult with `error` set
# =============================================================================

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from navim.rendering.content import ContentRootSelector
from navim.rendering.images import AsciiImageConverter
from navim.rendering.text import ImageFetcher, TreeRenderer

if TYPE_CHECKING:
    from navim.config import RenderingConfig

logger = logging.getLogger(__name__)

NO_CONTENT = "[No content]"


@dataclass
class RenderResult:
    """
    Result of rendering a page.

    Attributes:
        text: The rendered text content.
        image_count: Number of images embedded as character art.
        error: Error message if rendering failed.
    """
    text: str
    image_count: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        """Returns True if rendering succeeded."""
        return self.error is None

    def lines(self) -> list[str]:
        """Rendered text split into display lines."""
        return self.text.split("\n")


class RenderEngine:
    """
    Renders page HTML for the text view.

    Usage:
        >>> engine = RenderEngine(config.rendering, fetch_image=client.fetch_image)
        >>> result = engine.render_html(html, base_url=url)
        >>> print(result.text)

    Attributes:
        config: Rendering configuration.
        selector: Chooses the main-content subtree.
        renderer: Walks the subtree and produces text.
    """

    def __init__(
        self,
        config: "RenderingConfig",
        fetch_image: ImageFetcher | None = None,
    ) -> None:
        """
        Initialize the rendering engine.

        Args:
            config: Rendering configuration.
            fetch_image: Returns image bytes for a URL (or None). Without it
                         pages are rendered without images.
        """
        self.config = config
        self.selector = ContentRootSelector(min_length=config.min_content_length)
        self.renderer = TreeRenderer(
            fetch_image=fetch_image,
            converter=AsciiImageConverter(max_width=config.image_width),
            max_images=config.max_images,
        )

    def render_html(self, html: str, base_url: str | None = None) -> RenderResult:
        """
        Render a page's HTML.

        Args:
            html: Page source.
            base_url: URL the page was loaded from.

        Returns:
            RenderResult with the rendered text.
        """
        if not html or not html.strip():
            return RenderResult(text=NO_CONTENT)

        try:
            soup = BeautifulSoup(self._preclean_html(html), "lxml")
            return self.render_document(soup, base_url)
        except Exception as e:
            logger.error(f"Rendering failed for {base_url}: {e}", exc_info=True)
            return RenderResult(text=f"[Rendering error: {e}]", error=str(e))

    def render_document(
        self,
        document: BeautifulSoup,
        base_url: str | None = None,
    ) -> RenderResult:
        """Render an already parsed document."""
        root = self.selector.select(document)
        text, image_count = self.renderer.render(root, base_url=base_url)
        logger.debug(f"Rendered {len(text)} characters, {image_count} images")
        return RenderResult(text=text or NO_CONTENT, image_count=image_count)

    def _preclean_html(self, html: str) -> str:
        """Pre-clean HTML before parsing to remove problematic content."""
        # Remove IE conditional comments
        html = re.sub(r'<!--\[if[^\]]*\]>.*?<!\[endif\]-->', '', html, flags=re.DOTALL | re.IGNORECASE)
        html = re.sub(r'<!\[if[^\]]*\]>.*?<!\[endif\]>', '', html, flags=re.DOTALL | re.IGNORECASE)

        # Remove XML declarations
        html = re.sub(r'<\?xml[^>]*\?>', '', html, flags=re.IGNORECASE)

        return html
