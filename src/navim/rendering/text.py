# =============================================================================
# Tree Rendering
# =============================================================================
# Walks a parsed HTML tree and produces plain text for a fixed-width view.
#
# Every tag falls into one category (block, heading, list, table, media,
# excluded, ...). Each category has one handler, so supporting a new tag
# means adding it to TAG_CATEGORIES and, at most, writing one handler.
#
# All mutable state for one walk lives in a RenderState that is passed down
# the recursion. Nothing is shared between renders, so a TreeRenderer can be
# reused, and a single handler can be tested against a hand-built state.
#
# Images are fetched through an injected callback and converted to
# character art. Any failure along the way just drops that image.
# =============================================================================

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from bs4 import (
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    PageElement,
    ProcessingInstruction,
    Tag,
)

from navim.core.strings import truncate_string
from navim.rendering.admission import is_admissible, is_external_link, resolve_url
from navim.rendering.images import AsciiImage, AsciiImageConverter

logger = logging.getLogger(__name__)

ImageFetcher = Callable[[str], bytes | None]


# =============================================================================
# Tag Classification
# =============================================================================

class TagCategory(Enum):
    """How an element is rendered."""
    EXCLUDED = "excluded"
    BLOCK = "block"
    LINE_BREAK = "line_break"
    RULE = "rule"
    HEADING = "heading"
    LIST = "list"
    LIST_ITEM = "list_item"
    PREFORMATTED = "preformatted"
    CODE = "code"
    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"
    IMAGE = "image"
    FIGCAPTION = "figcaption"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    INLINE = "inline"


# Elements skipped together with everything inside them
EXCLUDED_TAGS = frozenset({
    "script", "style", "nav", "header", "footer", "aside", "noscript",
    "iframe", "form",
    # never visible content
    "head", "template", "svg",
})

# Class attribute substrings that mark page chrome
EXCLUDED_CLASS_TOKENS = (
    "hidden", "sidebar", "nav", "menu", "footer", "header",
    "advertisement", "ad-",
)

TAG_CATEGORIES: dict[str, TagCategory] = {
    "div": TagCategory.BLOCK,
    "section": TagCategory.BLOCK,
    "article": TagCategory.BLOCK,
    "main": TagCategory.BLOCK,
    "p": TagCategory.BLOCK,
    "figure": TagCategory.BLOCK,
    "body": TagCategory.BLOCK,
    "html": TagCategory.BLOCK,
    "dl": TagCategory.BLOCK,
    "dt": TagCategory.BLOCK,
    "dd": TagCategory.BLOCK,
    "details": TagCategory.BLOCK,
    "summary": TagCategory.BLOCK,
    "address": TagCategory.BLOCK,
    "br": TagCategory.LINE_BREAK,
    "hr": TagCategory.RULE,
    "h1": TagCategory.HEADING,
    "h2": TagCategory.HEADING,
    "h3": TagCategory.HEADING,
    "h4": TagCategory.HEADING,
    "h5": TagCategory.HEADING,
    "h6": TagCategory.HEADING,
    "ul": TagCategory.LIST,
    "ol": TagCategory.LIST,
    "li": TagCategory.LIST_ITEM,
    "pre": TagCategory.PREFORMATTED,
    "code": TagCategory.CODE,
    "strong": TagCategory.BOLD,
    "b": TagCategory.BOLD,
    "em": TagCategory.ITALIC,
    "i": TagCategory.ITALIC,
    "a": TagCategory.LINK,
    "img": TagCategory.IMAGE,
    "figcaption": TagCategory.FIGCAPTION,
    "blockquote": TagCategory.BLOCKQUOTE,
    "table": TagCategory.TABLE,
    "tr": TagCategory.TABLE_ROW,
    "th": TagCategory.TABLE_CELL,
    "td": TagCategory.TABLE_CELL,
}

# Blocks separated by an empty line rather than a plain line break
SPACED_BLOCKS = frozenset({"p", "article", "section", "main", "figure", "details"})


def has_excluded_class(element: Tag) -> bool:
    """True if the element's class attribute contains a denylisted token."""
    classes = element.get("class")
    if not classes:
        return False
    if not isinstance(classes, str):
        classes = " ".join(classes)
    classes = classes.lower()
    return any(token in classes for token in EXCLUDED_CLASS_TOKENS)


def classify(element: Tag) -> TagCategory:
    """Return the rendering category of an element. First match wins."""
    name = (element.name or "").lower()
    if name in EXCLUDED_TAGS or has_excluded_class(element):
        return TagCategory.EXCLUDED
    return TAG_CATEGORIES.get(name, TagCategory.INLINE)


# =============================================================================
# Output Glyphs
# =============================================================================

BULLET = "• "
LIST_INDENT = "  "
QUOTE_MARKER = "│ "
CELL_START = "│ "
CELL_SEPARATOR = " │ "
FIGCAPTION_MARKER = "  ↳ "
RULE_WIDTH = 40
HORIZONTAL_RULE = "─" * RULE_WIDTH
CODE_TOP = "┌" + "─" * (RULE_WIDTH - 1)
CODE_BOTTOM = "└" + "─" * (RULE_WIDTH - 1)
BOLD_MARKER = "**"
ITALIC_MARKER = "_"
CODE_MARKER = "`"
LINK_URL_LIMIT = 40
MAX_CAPTION_LENGTH = 100

# Heading borders, heaviest first
HEADING_GLYPHS = {1: "█", 2: "▓", 3: "▒", 4: "░", 5: "▪", 6: "·"}

# Lazy-loading pages keep the real URL in a data attribute
IMAGE_SOURCE_ATTRIBUTES = ("src", "data-src", "data-lazy-src")

# No separating space before text starting with these
_CLOSING_PUNCTUATION = tuple(".,;:!?)]}»”’%")

_WHITESPACE_RE = re.compile(r"\s+")
_ZERO_WIDTH_RE = re.compile(r"[\u200b\u200c\u200d\u2060\ufeff]+")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_EXTRA_NEWLINES_RE = re.compile(r"\n{3,}")

# Node types that never produce text
_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def heading_markers(level: int) -> tuple[str, str]:
    """Opening and closing border for a heading level (1-6)."""
    glyph = HEADING_GLYPHS[level] * 2
    return f"{glyph} ", f" {glyph}"


# =============================================================================
# Render State
# =============================================================================

@dataclass
class RenderState:
    """
    Accumulator for one walk of the tree.

    Attributes:
        base_url: Page URL used to resolve relative image references.
        max_images: Cap on converted images for this render.
        output: Text produced so far (append-only apart from rollback of
                empty inline wrappers).
        image_count: Images embedded so far.
        list_depth: Current list nesting level.
        in_preformatted: Inside <pre>: text is emitted verbatim.
        at_block_boundary: The last emission ended a block, so the next
                           inline text needs no separating space.
        attach_next: The next inline emission attaches to the previous one
                     without a space (set right after an opening marker).
        at_item_start: A list bullet was just written; blocks directly inside
                       the item start on the bullet line.
        seen_images: Resolved image URLs already attempted.
    """
    base_url: str | None = None
    max_images: int = 3
    output: str = ""
    image_count: int = 0
    list_depth: int = 0
    in_preformatted: bool = False
    at_block_boundary: bool = True
    attach_next: bool = False
    at_item_start: bool = False
    seen_images: set[str] = field(default_factory=set)

    # -------------------------------------------------------------------------
    # Buffer primitives
    # -------------------------------------------------------------------------

    def ensure_newline(self) -> None:
        """End the current line unless the buffer is empty or already ends one."""
        if self.output and not self.output.endswith("\n"):
            self.output += "\n"
            self.at_item_start = False
        self.at_block_boundary = True
        self.attach_next = False

    def ensure_blank_line(self) -> None:
        """Make sure the buffer ends with an empty line (idempotent)."""
        self.ensure_newline()
        if self.output and not self.output.endswith("\n\n"):
            self.output += "\n"

    def newline(self) -> None:
        """Unconditional line break."""
        self.output += "\n"
        self.at_block_boundary = True
        self.attach_next = False
        self.at_item_start = False

    def emit_raw(self, text: str) -> None:
        """Append text exactly as given."""
        self.output += text
        self.at_block_boundary = False
        self.attach_next = False
        self.at_item_start = False

    def emit_inline(self, text: str) -> None:
        """Append inline text, inserting a separating space if one is needed."""
        if self.attach_next:
            self.attach_next = False
        elif (
            not self.at_block_boundary
            and not self.in_preformatted
            and self.output
            and not self.output[-1].isspace()
            and not text.startswith(_CLOSING_PUNCTUATION)
        ):
            self.output += " "
        self.output += text
        self.at_block_boundary = False
        self.at_item_start = False

    def scratch(self) -> "RenderState":
        """
        A fresh state with an empty buffer that shares this state's settings
        and counters. Used to render a subtree in isolation.
        """
        return RenderState(
            base_url=self.base_url,
            max_images=self.max_images,
            image_count=self.image_count,
            list_depth=self.list_depth,
            in_preformatted=self.in_preformatted,
            seen_images=self.seen_images,
        )


def clean_output(text: str) -> str:
    """
    Final cleanup of rendered text.

    Drops control and zero-width characters, trailing whitespace on every
    line, runs of more than one blank line, and blank lines at both ends.
    """
    text = text.expandtabs(4)
    text = _CONTROL_RE.sub("", text)
    text = _ZERO_WIDTH_RE.sub("", text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = _EXTRA_NEWLINES_RE.sub("\n\n", text)
    return text.strip("\n")


# =============================================================================
# Renderer
# =============================================================================

class TreeRenderer:
    """
    Renders an HTML element tree to formatted plain text.

    Usage:
        >>> renderer = TreeRenderer(fetch_image=client.fetch_image)
        >>> text, image_count = renderer.render(root, base_url=page_url)

    Attributes:
        fetch_image: Callback returning image bytes for a URL, or None.
                     When not given, images are skipped.
        converter: Turns image bytes into character art.
        max_images: Images converted per render.
    """

    def __init__(
        self,
        fetch_image: ImageFetcher | None = None,
        converter: AsciiImageConverter | None = None,
        max_images: int = 3,
    ) -> None:
        self.fetch_image = fetch_image
        self.converter = converter or AsciiImageConverter()
        self.max_images = max_images

        self._handlers: dict[TagCategory, Callable[[Tag, RenderState], None]] = {
            TagCategory.EXCLUDED: self._render_excluded,
            TagCategory.BLOCK: self._render_block,
            TagCategory.LINE_BREAK: self._render_line_break,
            TagCategory.RULE: self._render_rule,
            TagCategory.HEADING: self._render_heading,
            TagCategory.LIST: self._render_list,
            TagCategory.LIST_ITEM: self._render_list_item,
            TagCategory.PREFORMATTED: self._render_preformatted,
            TagCategory.CODE: self._render_code,
            TagCategory.BOLD: self._render_bold,
            TagCategory.ITALIC: self._render_italic,
            TagCategory.LINK: self._render_link,
            TagCategory.IMAGE: self._render_image,
            TagCategory.FIGCAPTION: self._render_figcaption,
            TagCategory.BLOCKQUOTE: self._render_blockquote,
            TagCategory.TABLE: self._render_table,
            TagCategory.TABLE_ROW: self._render_table_row,
            TagCategory.TABLE_CELL: self._render_table_cell,
            TagCategory.INLINE: self.render_children,
        }

    def render(self, root: Tag, base_url: str | None = None) -> tuple[str, int]:
        """
        Render a subtree.

        The root itself is never excluded; its children are rendered under
        the normal rules.

        Args:
            root: Element (or whole document) to render.
            base_url: Page URL for resolving relative references.

        Returns:
            Tuple of (formatted text, number of images embedded).
        """
        state = RenderState(base_url=base_url, max_images=self.max_images)
        self.render_children(root, state)
        return clean_output(state.output), state.image_count

    def render_node(self, node: PageElement, state: RenderState) -> None:
        """Render one node (element or text) into the state."""
        if isinstance(node, Tag):
            self._handlers[classify(node)](node, state)
        elif isinstance(node, NavigableString) and not isinstance(node, _SKIPPED_STRINGS):
            self._render_text(str(node), state)

    def render_children(self, element: Tag, state: RenderState) -> None:
        """Render every child of an element, in document order."""
        for child in element.children:
            self.render_node(child, state)

    # =========================================================================
    # Text
    # =========================================================================

    def _render_text(self, text: str, state: RenderState) -> None:
        if state.in_preformatted:
            if text:
                state.emit_raw(text)
            return

        text = _WHITESPACE_RE.sub(" ", text).strip()
        if text:
            state.emit_inline(text)

    def _wrap_inline(
        self,
        element: Tag,
        state: RenderState,
        opening: str,
        closing: str,
    ) -> None:
        """Render children between a pair of markers; nothing if they're empty."""
        mark = len(state.output)
        was_boundary = state.at_block_boundary
        was_item_start = state.at_item_start

        state.emit_inline(opening)
        state.attach_next = True
        content_start = len(state.output)

        self.render_children(element, state)

        if len(state.output) == content_start:
            # Nothing rendered inside - drop the opening marker again
            state.output = state.output[:mark]
            state.at_block_boundary = was_boundary
            state.at_item_start = was_item_start
            state.attach_next = False
            return

        state.emit_raw(closing)

    # =========================================================================
    # Element Handlers
    # =========================================================================

    def _render_excluded(self, element: Tag, state: RenderState) -> None:
        pass

    def _render_block(self, element: Tag, state: RenderState) -> None:
        """Block container - its own lines, spaced paragraphs."""
        spaced = element.name in SPACED_BLOCKS
        separate = state.ensure_blank_line if spaced else state.ensure_newline

        if not state.at_item_start:
            separate()
        self.render_children(element, state)
        separate()

    def _render_line_break(self, element: Tag, state: RenderState) -> None:
        state.newline()

    def _render_rule(self, element: Tag, state: RenderState) -> None:
        state.ensure_blank_line()
        state.emit_raw(HORIZONTAL_RULE)
        state.ensure_blank_line()

    def _render_heading(self, element: Tag, state: RenderState) -> None:
        opening, closing = heading_markers(int(element.name[1]))

        state.ensure_blank_line()
        self._wrap_inline(element, state, opening, closing)
        state.ensure_blank_line()

    # Lists
    def _render_list(self, element: Tag, state: RenderState) -> None:
        """ul/ol - both use bullets; nesting only changes the indent."""
        top_level = state.list_depth == 0
        if top_level:
            state.ensure_blank_line()

        state.list_depth += 1
        try:
            self.render_children(element, state)
        finally:
            state.list_depth -= 1

        if top_level:
            state.ensure_blank_line()
        else:
            state.ensure_newline()

    def _render_list_item(self, element: Tag, state: RenderState) -> None:
        state.ensure_newline()
        indent = LIST_INDENT * max(state.list_depth - 1, 0)
        state.emit_raw(f"{indent}{BULLET}")
        state.at_item_start = True
        self.render_children(element, state)
        state.at_item_start = False

    # Code
    def _render_preformatted(self, element: Tag, state: RenderState) -> None:
        """pre - framed block, whitespace kept as-is."""
        state.ensure_blank_line()
        state.emit_raw(CODE_TOP)
        state.newline()

        was_preformatted = state.in_preformatted
        state.in_preformatted = True
        try:
            self.render_children(element, state)
        finally:
            state.in_preformatted = was_preformatted

        state.ensure_newline()
        state.emit_raw(CODE_BOTTOM)
        state.ensure_blank_line()

    def _render_code(self, element: Tag, state: RenderState) -> None:
        if state.in_preformatted:
            self.render_children(element, state)
        else:
            self._wrap_inline(element, state, CODE_MARKER, CODE_MARKER)

    # Formatting
    def _render_bold(self, element: Tag, state: RenderState) -> None:
        self._wrap_inline(element, state, BOLD_MARKER, BOLD_MARKER)

    def _render_italic(self, element: Tag, state: RenderState) -> None:
        self._wrap_inline(element, state, ITALIC_MARKER, ITALIC_MARKER)

    # Links
    def _render_link(self, element: Tag, state: RenderState) -> None:
        """a - link text, then a short arrow annotation with the target."""
        self.render_children(element, state)

        href = element.get("href")
        if isinstance(href, str) and is_external_link(href):
            state.emit_inline(f"[→ {truncate_string(href.strip(), LINK_URL_LIMIT)}]")

    # Media
    def _render_image(self, element: Tag, state: RenderState) -> None:
        """img - character art for admitted images, nothing otherwise."""
        block = self._load_image(element, state)
        if block is None:
            return

        state.ensure_blank_line()
        alt = element.get("alt")
        if isinstance(alt, str):
            alt = _WHITESPACE_RE.sub(" ", alt).strip()
            if alt and len(alt) < MAX_CAPTION_LENGTH:
                state.emit_raw(f"[Image: {alt}]")
                state.newline()
        state.emit_raw(str(block))
        state.ensure_blank_line()
        state.image_count += 1

    def _load_image(self, element: Tag, state: RenderState) -> AsciiImage | None:
        """Run the fetch-and-convert pipeline. Any failure gives None."""
        if self.fetch_image is None or state.image_count >= state.max_images:
            return None

        src = _image_source(element)
        if not src:
            return None
        if not is_admissible(src):
            logger.debug(f"Image filtered: {src}")
            return None

        url = resolve_url(src, state.base_url)
        if url is None:
            logger.debug(f"Image URL not resolvable: {src}")
            return None
        if url in state.seen_images:
            return None
        state.seen_images.add(url)

        try:
            data = self.fetch_image(url)
        except Exception as e:
            # The fetcher is supplied by the caller; treat any error as a miss
            logger.debug(f"Image fetch failed for {url}: {e}")
            return None
        if not data:
            logger.debug(f"Image fetch returned nothing: {url}")
            return None

        try:
            block = self.converter.convert(data)
        except Exception as e:
            logger.debug(f"Image conversion failed for {url}: {e}")
            return None
        if block is None:
            logger.debug(f"Image not convertible: {url}")
        return block

    def _render_figcaption(self, element: Tag, state: RenderState) -> None:
        state.ensure_newline()
        state.emit_raw(FIGCAPTION_MARKER)
        self.render_children(element, state)
        state.ensure_newline()

    # Quotes
    def _render_blockquote(self, element: Tag, state: RenderState) -> None:
        """
        blockquote - render the children on their own, then copy the result
        over with every line prefixed by the quote marker.
        """
        scratch = state.scratch()
        self.render_children(element, scratch)
        state.image_count = scratch.image_count

        quoted = clean_output(scratch.output)
        if not quoted.strip():
            return

        state.ensure_blank_line()
        state.emit_raw("\n".join(
            f"{QUOTE_MARKER}{line}".rstrip() for line in quoted.split("\n")
        ))
        state.ensure_blank_line()

    # Tables
    def _render_table(self, element: Tag, state: RenderState) -> None:
        """table - one line per row, cells separated by bars, no alignment."""
        state.ensure_blank_line()
        self.render_children(element, state)
        state.ensure_blank_line()

    def _render_table_row(self, element: Tag, state: RenderState) -> None:
        state.ensure_newline()
        state.emit_raw(CELL_START)
        self.render_children(element, state)

    def _render_table_cell(self, element: Tag, state: RenderState) -> None:
        self.render_children(element, state)
        state.emit_raw(CELL_SEPARATOR)


def _image_source(element: Tag) -> str | None:
    for attribute in IMAGE_SOURCE_ATTRIBUTES:
        value = element.get(attribute)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
