# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the Navim test suite.
# =============================================================================

from io import BytesIO

import pytest
from bs4 import BeautifulSoup
from PIL import Image

from navim.config import Config
from navim.rendering.text import TreeRenderer


def make_image_bytes(width: int, height: int, fmt: str = "PNG") -> bytes:
    """Encode a horizontal gradient image of the given size."""
    image = Image.new("L", (width, height))
    image.putdata([int(255 * x / max(width - 1, 1)) for _ in range(height) for x in range(width)])
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


@pytest.fixture
def temp_dir(tmp_path):
    """A temporary directory for test files."""
    return tmp_path


@pytest.fixture
def image_factory():
    """Build encoded test images: image_factory(width, height, fmt="PNG")."""
    return make_image_bytes


@pytest.fixture
def image_bytes():
    """A 200x100 PNG: converts to a 60x15 block at the default width."""
    return make_image_bytes(200, 100)


class FakeFetcher:
    """Image fetch callback that records the URLs it was asked for."""

    def __init__(self, data: bytes | None) -> None:
        self.data = data
        self.requested: list[str] = []

    def __call__(self, url: str) -> bytes | None:
        self.requested.append(url)
        return self.data


@pytest.fixture
def fetcher(image_bytes):
    """Fetcher returning the same valid image for every URL."""
    return FakeFetcher(image_bytes)


@pytest.fixture
def renderer(fetcher):
    """TreeRenderer wired to the fake fetcher."""
    return TreeRenderer(fetch_image=fetcher)


@pytest.fixture
def render(renderer):
    """Render an HTML fragment (its <body>) and return the text."""

    def _render(html: str, base_url: str | None = "https://example.com/page") -> str:
        soup = parse(html)
        root = soup.body or soup
        text, _ = renderer.render(root, base_url=base_url)
        return text

    return _render


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def article_html():
    """A page with site chrome around a long article."""
    paragraphs = "\n".join(
        f"<p>Paragraph {i} of the article body, with enough words to count.</p>"
        for i in range(12)
    )
    return f"""<!DOCTYPE html>
<html>
<head><title>Sample</title><style>body {{ color: red; }}</style></head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a></nav>
  <div class="sidebar-left">Sidebar links</div>
  <article>
    <h1>Article Title</h1>
    {paragraphs}
  </article>
  <footer>Copyright notice</footer>
  <script>console.log("hi");</script>
</body>
</html>"""
