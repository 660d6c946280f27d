"""Tests for the HTTP client, with the requests session stubbed out."""

import pytest
import requests

from navim.config import NetworkConfig
from navim.net import FetchError, HttpClient


class FakeResponse:
    def __init__(self, status=200, content=b"", headers=None, url="https://example.com/"):
        self.status_code = status
        self.content = content
        self.headers = headers or {}
        self.url = url

    @property
    def text(self):
        return self.content.decode("utf-8")

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session; returns queued responses."""

    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def make_client(session):
    return HttpClient(NetworkConfig(page_timeout=5.0, image_timeout=2.0), session=session)


class TestFetchPage:
    def test_returns_text_and_final_url(self):
        session = FakeSession(FakeResponse(content=b"<p>hi</p>", url="https://example.com/final"))

        html, url = make_client(session).fetch_page("https://example.com/start")

        assert html == "<p>hi</p>"
        assert url == "https://example.com/final"
        assert session.calls[0][1]["timeout"] == 5.0

    def test_sets_browser_headers(self):
        session = FakeSession(FakeResponse())

        make_client(session)

        assert "Mozilla" in session.headers["User-Agent"]
        assert "Accept-Language" in session.headers

    def test_network_error(self):
        session = FakeSession(error=requests.ConnectionError("refused"))

        with pytest.raises(FetchError):
            make_client(session).fetch_page("https://example.com/")

    def test_http_error(self):
        with pytest.raises(FetchError):
            make_client(FakeSession(FakeResponse(status=404))).fetch_page("https://example.com/")


class TestFetchImage:
    def test_returns_bytes(self, image_bytes):
        response = FakeResponse(content=image_bytes, headers={"Content-Type": "image/png"})
        session = FakeSession(response)

        data = make_client(session).fetch_image("https://example.com/photo.png")

        assert data == image_bytes
        assert session.calls[0][1]["timeout"] == 2.0
        assert session.calls[0][1]["headers"]["Accept"].startswith("image/")

    @pytest.mark.parametrize("content_type", ["text/html", "image/svg+xml", "image/gif", ""])
    def test_rejects_content_types(self, content_type):
        response = FakeResponse(content=b"x" * 5000, headers={"Content-Type": content_type})

        assert make_client(FakeSession(response)).fetch_image("https://x.com/a.png") is None

    def test_rejects_tiny_body(self):
        response = FakeResponse(content=b"x" * 43, headers={"Content-Type": "image/png"})

        assert make_client(FakeSession(response)).fetch_image("https://x.com/a.png") is None

    def test_failures_return_none(self):
        session = FakeSession(error=requests.Timeout("slow"))

        assert make_client(session).fetch_image("https://x.com/a.png") is None

    def test_http_error_returns_none(self):
        assert make_client(FakeSession(FakeResponse(status=500))).fetch_image("https://x.com/a.png") is None


def test_close():
    session = FakeSession()
    make_client(session).close()

    assert session.closed
