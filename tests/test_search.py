"""Tests for search result extraction."""

import pytest

from navim.config import SearchConfig
from navim.net import BraveSearch, FetchError, SearchError

RESULTS_PAGE = """
<html><body>
<div id="results">
  <div class="snippet" data-type="web">
    <a href="https://www.rust-lang.org/" class="heading-serpresult">
      <span class="snippet-url">rust-lang.org › learn</span>
      <span class="title">Rust Programming Language</span>
    </a>
    <div class="snippet-description">A language empowering everyone.</div>
  </div>
  <div class="snippet" data-type="web">
    <div class="title">No link here</div>
  </div>
  <div class="snippet" data-type="web">
    <a href="/relative">ignored</a>
    <a href="https://doc.rust-lang.org/book/">
      <span class="title">The Rust Book</span>
    </a>
    <div class="generic-snippet">Learn\tRust
      step by step.</div>
  </div>
  <div class="snippet"><a href="https://example.com/3"><span class="title">Third</span></a></div>
</div>
</body></html>
"""


class FakeClient:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def get(self, url, params=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return type("Response", (), {"text": self.text})()


def test_parse_results():
    results = BraveSearch(FakeClient(), SearchConfig()).parse_results(RESULTS_PAGE)

    assert [r.title for r in results] == ["Rust Programming Language", "The Rust Book", "Third"]
    first = results[0]
    assert first.url == "https://www.rust-lang.org/"
    assert first.display_url == "rust-lang.org"
    assert first.description == "A language empowering everyone."
    assert results[1].url == "https://doc.rust-lang.org/book/"
    assert results[1].description.startswith("Learn")


def test_max_results():
    results = BraveSearch(FakeClient(), SearchConfig(max_results=2)).parse_results(RESULTS_PAGE)

    assert len(results) == 2


def test_search_sends_query():
    client = FakeClient(RESULTS_PAGE)

    results = BraveSearch(client, SearchConfig()).search("rust programming")

    assert len(results) == 3
    assert client.calls == [("https://search.brave.com/search", {"q": "rust programming"})]


def test_empty_page():
    assert BraveSearch(FakeClient("<html></html>"), SearchConfig()).search("nothing") == []


def test_fetch_failure_becomes_search_error():
    client = FakeClient(error=FetchError("offline"))

    with pytest.raises(SearchError):
        BraveSearch(client, SearchConfig()).search("rust")
