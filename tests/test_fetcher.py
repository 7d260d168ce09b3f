import httpx
import pytest

from credireader import fetcher
from credireader.fetcher import (
    ContentFetcher,
    FetchedContent,
    combine_for_analysis,
    is_domain_only,
    is_valid_url,
    normalize_url,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("https://www.bbc.co.uk/news/world-123", True),
        ("http://example.com", True),
        ("www.example.com/story", True),
        ("example.com/story", False),
        ("https://", False),
        ("Read https://example.com now", False),
        ("", False),
    ],
)
def test_is_valid_url(text, expected):
    assert is_valid_url(text) is expected


def test_normalize_url():
    assert normalize_url("  www.example.com/a ") == "https://www.example.com/a"
    assert normalize_url("http://example.com") == "http://example.com"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("https://example.com/", True),
        ("www.example.com", True),
        ("example.com", True),
        ("  http://www.bbc.co.uk  ", True),
        ("https://example.com/news/story", False),
        ("https://example.com/?q=story", False),
        ("example", False),
        ("", False),
    ],
)
def test_is_domain_only(text, expected):
    assert is_domain_only(text) is expected


def test_combine_for_analysis_orders_parts():
    fetched = FetchedContent(
        success=True,
        url="https://example.com/a",
        title="Title",
        published_date="2025-01-10",
        author="Jane Doe",
        description="Summary",
        content="Body text",
    )
    assert combine_for_analysis(fetched) == (
        "Title\n\nPublished: 2025-01-10\n\nAuthor: Jane Doe\n\nSummary\n\nBody text\n\nSource: https://example.com/a"
    )


@pytest.mark.asyncio
async def test_fetch_http_error():
    content_fetcher = ContentFetcher(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    fetched = await content_fetcher.fetch("https://example.com/missing")
    assert not fetched.success
    assert fetched.error == "HTTP error: 404"


@pytest.mark.asyncio
async def test_fetch_network_error():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    fetched = await ContentFetcher(transport=httpx.MockTransport(handler)).fetch("www.example.com/a")
    assert not fetched.success
    assert fetched.url == "https://www.example.com/a"
    assert fetched.error == "network error: ConnectTimeout"


@pytest.mark.asyncio
async def test_fetch_extracts_article(monkeypatch):
    def fake_extract(html, url):
        assert "<article>" in html
        return {
            "title": "Council approves budget",
            "text": "The council approved the budget on Tuesday.",
            "date": "2025-01-10",
            "author": "Jane Doe",
            "description": "Budget news",
        }

    monkeypatch.setattr(fetcher, "extract_article", fake_extract)
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, text="<html><article>...</article></html>")
    )
    fetched = await ContentFetcher(transport=transport).fetch("https://example.com/news/budget")
    assert fetched.success
    assert fetched.title == "Council approves budget"
    assert fetched.published_date == "2025-01-10"
    assert fetched.word_count == 7


@pytest.mark.asyncio
async def test_fetch_without_extractable_text(monkeypatch):
    monkeypatch.setattr(fetcher, "extract_article", lambda html, url: None)
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html></html>"))
    fetched = await ContentFetcher(transport=transport).fetch("https://example.com/empty")
    assert not fetched.success
    assert fetched.error == "could not extract article content"
