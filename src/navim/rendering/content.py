# =============================================================================
# Content Root Selection
# =============================================================================
# Picks the part of a page most likely to be the main content, so the
# renderer skips navigation, sidebars and boilerplate around it.
#
# Selectors are tried in priority order: site-specific containers first
# (Wikipedia, StackOverflow), then generic article/main containers, then
# blog and documentation layouts. The first match whose serialized HTML is
# long enough wins. If nothing qualifies, the whole body is used.
# =============================================================================

import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


# Minimum serialized size for a candidate; shorter matches are usually
# teaser boxes or empty wrappers
MIN_CONTENT_LENGTH = 500

CONTENT_SELECTORS = (
    # Wikipedia
    "#mw-content-text .mw-parser-output",
    "#mw-content-text",
    "#bodyContent",

    # StackOverflow
    ".question .s-prose",
    ".answercell .s-prose",
    "#mainbar",

    # Generic article selectors
    "article .post-content",
    "article .entry-content",
    "article .content",
    "article",

    # Main content areas
    "main .content",
    "main article",
    "#main-content",
    ".main-content",
    "[role='main']",
    "main",

    # Blog/news sites
    ".post-body",
    ".article-body",
    ".story-body",

    # Documentation sites
    ".markdown-body",
    ".documentation",
    ".doc-content",
    "#readme",
    "#content",
)


class ContentRootSelector:
    """
    Chooses the subtree to render.

    Usage:
        >>> selector = ContentRootSelector()
        >>> root = selector.select(soup)
    """

    def __init__(
        self,
        selectors: tuple[str, ...] = CONTENT_SELECTORS,
        min_length: int = MIN_CONTENT_LENGTH,
    ) -> None:
        self.selectors = selectors
        self.min_length = min_length

    def select(self, document: BeautifulSoup | Tag) -> Tag:
        """
        Return the main-content element of a document.

        Never fails: falls back to <body>, or to the document itself.
        """
        for selector in self.selectors:
            element = document.select_one(selector)
            if element is None:
                continue
            if len(str(element)) > self.min_length:
                logger.debug(f"Content root: {selector}")
                return element

        logger.debug("Content root: no selector matched, using whole document")
        body = document.find("body")
        return body if isinstance(body, Tag) else document
