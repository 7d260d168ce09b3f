"""
Fact-check correlation via the Google Fact Check Tools API.
Extracts candidate claims, queries the API sequentially and folds the results
into a single signal. Any query failure is recorded as skipped, never raised.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .config import get_settings
from .models import (
    FactCheckClaim,
    FactCheckMatch,
    FactCheckReview,
    FactCheckSignal,
    RatingBadge,
    RatingLabel,
    ReasonType,
    SearchLink,
)
from .rules import Outcome, Rule, always, first_match

logger = logging.getLogger(__name__)

MAX_CLAIMS = 5
MAX_SENTENCE_CLAIMS = 3
MAX_QUERY_LENGTH = 500
MAX_RESULTS = 5

URL_PATTERN = re.compile(r"https?://\S+")
SENTENCE_SPLIT = re.compile(r"[.!?]+")
QUOTED_CLAIM = re.compile(r'"([^"]{20,})"')
REPORTED_CLAIM = re.compile(
    r"(?:claim(?:s|ed)?|said|stated|announced|reported)\s*(?:that)?\s*([^.!?]{20,})",
    re.IGNORECASE,
)
FALSE_MARKERS = ("false", "fake", "pants on fire")


def extract_claims(text: str) -> list[str]:
    """Pick up to five candidate claims: leading sentences, quotes, reported statements."""
    clean_text = URL_PATTERN.sub("", text)
    sentences = [s.strip() for s in SENTENCE_SPLIT.split(clean_text) if len(s.strip()) > 20]
    claims = sentences[:MAX_SENTENCE_CLAIMS]
    claims.extend(QUOTED_CLAIM.findall(text))
    claims.extend(match.group(1).strip() for match in REPORTED_CLAIM.finditer(text))
    return list(dict.fromkeys(claims))[:MAX_CLAIMS]


_BADGES = {
    RatingLabel.TRUE: ("#22c55e", "check_circle"),
    RatingLabel.FALSE: ("#ef4444", "cancel"),
    RatingLabel.MIXED: ("#eab308", "warning"),
    RatingLabel.UNVERIFIED: ("#6b7280", "help"),
    RatingLabel.OTHER: ("#3b82f6", "info"),
}

RATING_RULES: tuple[Rule[str, RatingLabel], ...] = (
    Rule("true", lambda r: "true" in r and "false" not in r and "partly" not in r, RatingLabel.TRUE),
    Rule("false", lambda r: any(marker in r for marker in FALSE_MARKERS), RatingLabel.FALSE),
    Rule(
        "mixed",
        lambda r: any(marker in r for marker in ("partly", "half", "mixed", "misleading")),
        RatingLabel.MIXED,
    ),
    Rule(
        "unverified",
        lambda r: any(marker in r for marker in ("unproven", "unverified", "unknown")),
        RatingLabel.UNVERIFIED,
    ),
    Rule("other", always, RatingLabel.OTHER),
)


def format_rating(rating: str | None) -> RatingBadge:
    label = first_match(RATING_RULES, (rating or "").lower()).outcome
    color, icon = _BADGES[label]
    return RatingBadge(label=label, text=rating, color=color, icon=icon)


def is_false_rating(rating: str | None) -> bool:
    lowered = (rating or "").lower()
    return any(marker in lowered for marker in FALSE_MARKERS)


def is_true_rating(rating: str | None) -> bool:
    lowered = (rating or "").lower()
    return "true" in lowered and "false" not in lowered


def build_search_links(query: str) -> list[SearchLink]:
    encoded = quote(query[:200], safe="!~*'()")
    return [
        SearchLink(
            name="Google Fact Check Explorer",
            url=f"https://toolbox.google.com/factcheck/explorer/search/{encoded}",
            icon="fact_check",
            description="Search all verified fact-checkers",
        ),
        SearchLink(
            name="Snopes",
            url=f"https://www.snopes.com/?s={encoded}",
            icon="search",
            description="Popular fact-checking site since 1994",
        ),
        SearchLink(
            name="PolitiFact",
            url=f"https://www.politifact.com/search/?q={encoded}",
            icon="gavel",
            description="Pulitzer Prize-winning political fact-checker",
        ),
        SearchLink(
            name="FactCheck.org",
            url=f"https://www.factcheck.org/?s={encoded}",
            icon="verified",
            description="Annenberg Public Policy Center project",
        ),
        SearchLink(
            name="AFP Fact Check",
            url=f"https://factcheck.afp.com/list/all/all/{encoded}",
            icon="language",
            description="Global fact-checking by AFP",
        ),
        SearchLink(
            name="Alt News (India)",
            url=f"https://www.altnews.in/?s={encoded}",
            icon="flag",
            description="Indian fact-checking platform",
        ),
    ]


@dataclass(frozen=True)
class QueryOk:
    claims: list[FactCheckClaim]


@dataclass(frozen=True)
class QuerySkipped:
    reason: str


QueryOutcome = QueryOk | QuerySkipped


class FactCheckClient:
    """Thin async client for the claims:search endpoint."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        language: str | None = None,
        page_size: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.fact_check_api_key
        self._endpoint = endpoint or settings.fact_check_api_url
        self._timeout = timeout if timeout is not None else settings.fact_check_timeout
        self._language = language or settings.fact_check_language
        self._page_size = page_size if page_size is not None else settings.fact_check_page_size
        self._transport = transport

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    async def search(self, query: str) -> QueryOutcome:
        if not self._api_key:
            return QuerySkipped("no API key")

        params = {
            "query": query[:MAX_QUERY_LENGTH],
            "key": self._api_key,
            "pageSize": str(self._page_size),
            "languageCode": self._language,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._endpoint, params=params, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            return QuerySkipped(f"network error: {exc.__class__.__name__}")

        if response.status_code != 200:
            return QuerySkipped(f"HTTP error: {response.status_code}")

        try:
            payload = response.json()
            claims = [self._parse_claim(item) for item in payload.get("claims") or []]
        except (ValueError, TypeError, AttributeError, ValidationError):
            return QuerySkipped("malformed response")
        return QueryOk(claims)

    @staticmethod
    def _parse_claim(item: dict[str, Any]) -> FactCheckClaim:
        reviews = []
        for review in item.get("claimReview") or []:
            publisher = review.get("publisher") or {}
            reviews.append(
                FactCheckReview(
                    publisher=publisher.get("name"),
                    publisher_site=publisher.get("site"),
                    url=review.get("url"),
                    title=review.get("title"),
                    rating=review.get("textualRating"),
                    rating_value=(review.get("reviewRating") or {}).get("ratingValue"),
                    review_date=review.get("reviewDate"),
                )
            )
        return FactCheckClaim(
            text=item.get("text"),
            claimant=item.get("claimant"),
            claim_date=item.get("claimDate"),
            reviews=reviews,
        )


def merge_outcomes(outcomes: Iterable[QueryOutcome]) -> tuple[list[FactCheckMatch], list[str]]:
    """Fold per-claim outcomes into unique review matches plus the skip reasons."""
    matches: list[FactCheckMatch] = []
    skipped: list[str] = []
    seen_urls: set[str] = set()
    for outcome in outcomes:
        if isinstance(outcome, QuerySkipped):
            skipped.append(outcome.reason)
            continue
        for claim in outcome.claims:
            for review in claim.reviews:
                if not review.url or review.url in seen_urls:
                    continue
                seen_urls.add(review.url)
                matches.append(
                    FactCheckMatch(
                        claim=claim.text,
                        claimant=claim.claimant,
                        publisher=review.publisher,
                        publisher_site=review.publisher_site,
                        url=review.url,
                        title=review.title,
                        rating=review.rating,
                        rating_badge=format_rating(review.rating),
                        review_date=review.review_date,
                    )
                )
    return matches[:MAX_RESULTS], skipped


VERDICT_RULES: tuple[Rule[Sequence[FactCheckMatch], Outcome], ...] = (
    Rule(
        "debunked",
        lambda matches: any(is_false_rating(m.rating) for m in matches),
        Outcome(
            -15,
            ReasonType.NEGATIVE,
            "Related Claims Previously Debunked",
            "Similar claims have been fact-checked and rated as FALSE by {publisher}. "
            "Please review the fact-checks below.",
        ),
    ),
    Rule(
        "verified",
        lambda matches: any(is_true_rating(m.rating) for m in matches),
        Outcome(
            10,
            ReasonType.POSITIVE,
            "Related Claims Verified",
            "Similar claims have been independently verified by {publisher}.",
        ),
    ),
    Rule(
        "related",
        lambda matches: bool(matches),
        Outcome(
            0,
            ReasonType.INFO,
            "Related Fact-Checks Found",
            "We found {count} related fact-check(s). Review them for more context.",
        ),
    ),
    Rule(
        "none",
        always,
        Outcome(
            0,
            ReasonType.INFO,
            "No Direct Fact-Checks Found",
            "No existing fact-checks matched this content. Use the links below to search manually.",
        ),
    ),
)


def _first_publisher(matches: Sequence[FactCheckMatch], rule_name: str) -> str:
    if rule_name == "debunked":
        match = next(m for m in matches if is_false_rating(m.rating))
    elif rule_name == "verified":
        match = next(m for m in matches if is_true_rating(m.rating))
    else:
        return "fact-checkers"
    return match.publisher or "fact-checkers"


class FactCheckCorrelator:
    """Correlate a submission with published fact-checks."""

    def __init__(
        self,
        client: FactCheckClient | None = None,
        *,
        max_queries: int | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._client = client or FactCheckClient()
        self._max_queries = max_queries if max_queries is not None else settings.fact_check_max_queries
        self._query_timeout = timeout if timeout is not None else settings.fact_check_timeout

    async def correlate(self, text: str, *, skip: bool = False) -> FactCheckSignal:
        claims = extract_claims(text)
        search_urls = build_search_links(claims[0] if claims else text[:100])

        if skip:
            return FactCheckSignal(score=0, skipped=True, queries_searched=claims, search_urls=search_urls)

        outcomes: list[QueryOutcome] = []
        for claim in claims[: self._max_queries]:
            outcome = await self._query(claim)
            if isinstance(outcome, QuerySkipped):
                logger.warning("Fact-check query skipped (%s): %s", outcome.reason, claim[:60])
            outcomes.append(outcome)

        matches, skipped = merge_outcomes(outcomes)
        rule = first_match(VERDICT_RULES, matches)
        logger.info(
            "Fact-check correlation: %d claims searched, %d reviews kept, verdict=%s",
            min(len(claims), self._max_queries),
            len(matches),
            rule.name,
        )
        return FactCheckSignal(
            score=rule.outcome.score,
            reason=rule.outcome.reason(publisher=_first_publisher(matches, rule.name), count=len(matches)),
            has_api_key=self._client.has_api_key,
            queries_searched=claims,
            fact_checks=matches,
            search_urls=search_urls,
            skipped_queries=skipped,
        )

    async def _query(self, claim: str) -> QueryOutcome:
        try:
            return await asyncio.wait_for(self._client.search(claim), timeout=self._query_timeout)
        except asyncio.TimeoutError:
            return QuerySkipped("network error: timeout")
        except Exception as exc:
            logger.exception("Unexpected fact-check failure")
            return QuerySkipped(f"network error: {exc}")
