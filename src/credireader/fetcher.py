"""
Content fetcher for URL submissions.
Downloads the page with httpx and pulls article text plus metadata with trafilatura.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any
from urllib.parse import urlparse

import httpx
import trafilatura
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .config import get_settings

logger = logging.getLogger(__name__)

URL_PREFIX = re.compile(r"^(https?://|www\.)", re.IGNORECASE)
DOMAIN_ONLY = re.compile(
    r"^(?:https?://)?(?:www\.)?[a-zA-Z0-9-]+\.[a-zA-Z]{2,}(?:\.[a-zA-Z]{2,})?/?$",
    re.IGNORECASE,
)
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class FetchedContent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    url: str
    title: str | None = None
    content: str | None = None
    published_date: str | None = None
    author: str | None = None
    description: str | None = None
    word_count: int = 0
    error: str | None = None


def is_valid_url(text: str) -> bool:
    """True for strings that start with http(s):// or www. and parse to a host."""
    trimmed = (text or "").strip()
    if not trimmed or " " in trimmed or not URL_PREFIX.match(trimmed):
        return False
    parsed = urlparse(normalize_url(trimmed))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def normalize_url(url: str) -> str:
    trimmed = url.strip()
    if trimmed.lower().startswith("www."):
        return f"https://{trimmed}"
    return trimmed


def is_domain_only(text: str) -> bool:
    """True for a bare site address such as ``example.com`` or ``https://www.example.com/``."""
    return bool(DOMAIN_ONLY.match((text or "").strip()))


def extract_article(html: str, url: str) -> dict[str, Any] | None:
    try:
        extracted_json = trafilatura.extract(html, url=url, output_format="json", with_metadata=True)
    except ValueError:
        extracted_json = None
    if not extracted_json:
        return None
    try:
        payload = json.loads(extracted_json)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def combine_for_analysis(fetched: FetchedContent) -> str:
    parts = []
    if fetched.title:
        parts.append(fetched.title)
    if fetched.published_date:
        parts.append(f"Published: {fetched.published_date}")
    if fetched.author:
        parts.append(f"Author: {fetched.author}")
    if fetched.description:
        parts.append(fetched.description)
    if fetched.content:
        parts.append(fetched.content)
    parts.append(f"Source: {fetched.url}")
    return "\n\n".join(parts)


class ContentFetcher:
    def __init__(self, *, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._timeout = timeout if timeout is not None else get_settings().fetch_timeout
        self._transport = transport

    async def fetch(self, url: str) -> FetchedContent:
        target = normalize_url(url)
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.get(target)
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch %s: %s", target, exc)
            return FetchedContent(success=False, url=target, error=f"network error: {exc.__class__.__name__}")

        if response.status_code != 200:
            return FetchedContent(success=False, url=target, error=f"HTTP error: {response.status_code}")

        payload = await asyncio.to_thread(extract_article, response.text, target)
        if not payload:
            return FetchedContent(success=False, url=target, error="could not extract article content")

        content = payload.get("text") or payload.get("raw_text")
        if not content:
            return FetchedContent(success=False, url=target, error="could not extract article content")

        content = str(content)
        return FetchedContent(
            success=True,
            url=target,
            title=payload.get("title"),
            content=content,
            published_date=payload.get("date"),
            author=payload.get("author"),
            description=payload.get("description") or payload.get("excerpt"),
            word_count=len(content.split()),
        )
