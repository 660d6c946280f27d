"""Tests for the page rendering pipeline."""

from navim.config import RenderingConfig
from navim.rendering import RenderEngine, RenderResult
from navim.rendering.engine import NO_CONTENT

from conftest import FakeFetcher


def test_renders_main_content_only(article_html):
    result = RenderEngine(RenderingConfig()).render_html(article_html, "https://example.com/a")

    assert result.success
    assert result.text.startswith("██ Article Title ██")
    assert "Paragraph 11 of the article body" in result.text
    assert "Home" not in result.text
    assert "Sidebar links" not in result.text
    assert "Copyright" not in result.text
    assert "console.log" not in result.text


def test_fallback_to_body_is_not_empty():
    html = "<html><body><div>Short page without any known container.</div></body></html>"

    result = RenderEngine(RenderingConfig()).render_html(html)

    assert result.text == "Short page without any known container."


def test_empty_input():
    result = RenderEngine(RenderingConfig()).render_html("   ")

    assert result.text == NO_CONTENT
    assert result.image_count == 0


def test_page_with_only_chrome():
    html = "<html><body><nav>Menu</nav><footer>Footer</footer></body></html>"

    result = RenderEngine(RenderingConfig()).render_html(html)

    assert result.text == NO_CONTENT


def test_conditional_comments_and_xml_declaration_are_removed():
    html = (
        '<?xml version="1.0" encoding="utf-8"?>'
        "<html><body><!--[if IE]><p>Old browser</p><![endif]-->"
        "<p>Modern</p></body></html>"
    )

    result = RenderEngine(RenderingConfig()).render_html(html)

    assert result.text == "Modern"


def test_images_use_configured_cap(image_bytes):
    imgs = "".join(f"<p><img src='/img/photo{i}.jpg'></p>" for i in range(4))
    html = f"<html><body>{imgs}</body></html>"
    fetcher = FakeFetcher(image_bytes)

    engine = RenderEngine(RenderingConfig(max_images=2), fetch_image=fetcher)
    result = engine.render_html(html, base_url="https://example.com/page")

    assert result.image_count == 2
    assert fetcher.requested == [
        "https://example.com/img/photo0.jpg",
        "https://example.com/img/photo1.jpg",
    ]


def test_configured_image_width(image_bytes):
    engine = RenderEngine(RenderingConfig(image_width=30), fetch_image=FakeFetcher(image_bytes))

    result = engine.render_html("<body><img src='https://x.com/photo.jpg'></body>")

    assert result.lines()[0] == "┌" + "─" * 30 + "┐"


def test_unexpected_failure_is_reported(monkeypatch):
    engine = RenderEngine(RenderingConfig())

    def explode(root, base_url=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(engine.renderer, "render", explode)
    result = engine.render_html("<p>x</p>")

    assert not result.success
    assert result.error == "boom"
    assert "boom" in result.text


def test_result_lines():
    assert RenderResult(text="a\nb").lines() == ["a", "b"]
