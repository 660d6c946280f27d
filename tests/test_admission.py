"""Tests for image admission and URL resolution."""

import pytest

from navim.rendering.admission import (
    is_admissible,
    is_admissible_response,
    is_external_link,
    resolve_url,
)


class TestIsAdmissible:
    def test_photo_is_admitted(self):
        assert is_admissible("https://x.com/photo.jpg")

    def test_data_uri_is_rejected(self):
        assert not is_admissible("data:image/png;base64,AAA")

    @pytest.mark.parametrize("src", [
        "https://x.com/icon-small.png",
        "https://x.com/user/avatar.jpg",
        "https://x.com/img/Sprite-sheet.png",
        "https://x.com/tracking.png?id=1",
        "https://x.com/1x1.png",
        "https://x.com/brand/LOGO.png",
        "https://x.com/static/hero.jpg",
    ])
    def test_denylisted_tokens(self, src):
        assert not is_admissible(src)

    def test_rejected_extensions(self):
        assert not is_admissible("https://x.com/diagram.svg")
        assert not is_admissible("https://x.com/funny.GIF")
        assert not is_admissible("https://x.com/diagram.svg?v=2")

    def test_relative_reference(self):
        assert is_admissible("/images/photo.png")

    def test_empty(self):
        assert not is_admissible("   ")


class TestIsAdmissibleResponse:
    def test_jpeg(self):
        assert is_admissible_response("image/jpeg", 5000)

    def test_not_an_image(self):
        assert not is_admissible_response("text/html; charset=utf-8", 5000)

    def test_svg_and_gif(self):
        assert not is_admissible_response("image/svg+xml", 5000)
        assert not is_admissible_response("image/gif", 5000)

    def test_tiny_body(self):
        assert not is_admissible_response("image/png", 999)
        assert is_admissible_response("image/png", 1000)


class TestResolveUrl:
    def test_absolute(self):
        assert resolve_url("https://cdn.x.com/a.png", None) == "https://cdn.x.com/a.png"

    def test_protocol_relative(self):
        assert resolve_url("//cdn.x.com/a.png", None) == "https://cdn.x.com/a.png"

    def test_relative_with_base(self):
        assert resolve_url("img/a.png", "https://x.com/blog/post") == "https://x.com/blog/img/a.png"
        assert resolve_url("/a.png", "https://x.com/blog/post") == "https://x.com/a.png"

    def test_relative_without_base(self):
        assert resolve_url("img/a.png", None) is None

    def test_other_schemes(self):
        assert resolve_url("javascript:void(0)", "https://x.com/") is None
        assert resolve_url("cid:part1", "https://x.com/") is None


class TestIsExternalLink:
    def test_http_links(self):
        assert is_external_link("https://x.com/page")
        assert is_external_link("http://x.com/")

    def test_other_links(self):
        assert not is_external_link("/relative")
        assert not is_external_link("#section")
        assert not is_external_link("javascript:alert(1)")
        assert not is_external_link("mailto:a@b.c")
