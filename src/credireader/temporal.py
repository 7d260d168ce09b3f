"""
Temporal relevance - detect stale content and reward fresh publication dates.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime

from .models import DatedReference, DatePattern, ExtractedDate, ReasonType, TemporalSignal
from .rules import Outcome, Rule, always, first_match

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100
SECONDS_PER_DAY = 60 * 60 * 24

_MONTH = (
    r"(Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
    r"Aug(?:ust)?|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
MONTHS = {name: index for index, name in enumerate(
    ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"], start=1
)}


def _build_date(year: int, month: int, day: int) -> date | None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _month_day_year(match: re.Match) -> tuple[date | None, DatePattern]:
    month = MONTHS[match.group(1)[:3].lower()]
    return _build_date(int(match.group(3)), month, int(match.group(2))), DatePattern.MONTH_DAY_YEAR


def _day_month_year(match: re.Match) -> tuple[date | None, DatePattern]:
    month = MONTHS[match.group(2)[:3].lower()]
    return _build_date(int(match.group(3)), month, int(match.group(1))), DatePattern.DAY_MONTH_YEAR


def _iso(match: re.Match) -> tuple[date | None, DatePattern]:
    year, month, day = (int(g) for g in match.groups())
    return _build_date(year, month, day), DatePattern.ISO


def _slash(match: re.Match) -> tuple[date | None, DatePattern]:
    first, second, year = (int(g) for g in match.groups())
    # MM/DD wins whenever the first field can be a month
    if first <= 12 and second <= 31:
        return _build_date(year, first, second), DatePattern.SLASH_MDY
    if second <= 12 and first <= 31:
        return _build_date(year, second, first), DatePattern.SLASH_DMY
    return None, DatePattern.SLASH_MDY


def _mid_year(pattern: DatePattern) -> Callable[[re.Match], tuple[date | None, DatePattern]]:
    def convert(match: re.Match) -> tuple[date | None, DatePattern]:
        return _build_date(int(match.group(1)), 7, 1), pattern

    return convert


DATE_PATTERNS: tuple[tuple[re.Pattern, Callable[[re.Match], tuple[date | None, DatePattern]]], ...] = (
    # December 27, 2024 / Dec 27th 2024
    (re.compile(rf"\b{_MONTH}\s+(\d{{1,2}})(?:st|nd|rd|th)?,?\s+(\d{{4}})\b", re.IGNORECASE), _month_day_year),
    # 27 December 2024
    (re.compile(rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s+{_MONTH}\s+(\d{{4}})\b", re.IGNORECASE), _day_month_year),
    # 2024-12-27
    (re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b"), _iso),
    # 12/27/2024 or 27/12/2024
    (re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b"), _slash),
    # in 2020, since 2019
    (re.compile(r"\b(?:in|from|since|during)\s+(\d{4})\b", re.IGNORECASE), _mid_year(DatePattern.YEAR_MENTION)),
    # 2021 report, 2019 study
    (
        re.compile(r"\b(20[0-2]\d)\s+(?:report|study|article|news|data|research|survey)\b", re.IGNORECASE),
        _mid_year(DatePattern.YEAR_NOUN),
    ),
)


def extract_dates(text: str) -> list[ExtractedDate]:
    """Extract every calendar date mentioned in text, in pattern-family order."""
    found: list[ExtractedDate] = []
    for pattern, convert in DATE_PATTERNS:
        for match in pattern.finditer(text):
            value, family = convert(match)
            if value is not None:
                found.append(ExtractedDate(value=value, pattern=family))
    return found


def parse_published_hint(value: str | None) -> date | None:
    """Parse an ISO-8601 or RFC-2822 publication date supplied by the content fetcher."""
    if not value:
        return None
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            logger.debug("Ignoring unparsable published date hint %r", value)
            return None
    return _build_date(parsed.year, parsed.month, parsed.day)


def age_in_days(value: date, now: datetime) -> int:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return math.ceil(abs((now - midnight).total_seconds()) / SECONDS_PER_DAY)


def format_age(days: int) -> str:
    if days < 1:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 365:
        return f"{days // 30} months ago"
    return f"{days // 365} years ago"


@dataclass(frozen=True)
class _AgeFacts:
    oldest_age: int
    newest_age: int


VERY_OLD = "very-old"
OUTDATED = "outdated"

AGE_RULES: tuple[Rule[_AgeFacts, Outcome], ...] = (
    Rule(
        VERY_OLD,
        lambda f: f.oldest_age > 730,
        Outcome(
            -10,
            ReasonType.WARNING,
            "Outdated Content Detected",
            "This content references information from {oldest}. "
            "Verify if the information is still current and relevant.",
        ),
    ),
    Rule(
        OUTDATED,
        lambda f: f.oldest_age > 365,
        Outcome(
            -5,
            ReasonType.WARNING,
            "Older Content",
            "This content appears to be from {oldest}. Check if more recent information is available.",
        ),
    ),
    Rule(
        "recent-publication",
        lambda f: f.newest_age <= 7,
        Outcome(
            5,
            ReasonType.POSITIVE,
            "Recent Publication",
            "This content appears to be from {newest}, suggesting it contains current information.",
        ),
    ),
    Rule(
        "recent-content",
        lambda f: f.newest_age <= 30,
        Outcome(
            3,
            ReasonType.POSITIVE,
            "Recent Content",
            "Published approximately {newest}. The information should be relatively current.",
        ),
    ),
    Rule(
        "aged",
        always,
        Outcome(
            0,
            ReasonType.INFO,
            "Content Age",
            "This content appears to be from {newest}. Consider whether the topic requires more recent updates.",
        ),
    ),
)

NO_DATES = Outcome(
    0,
    ReasonType.INFO,
    "No Publication Date Found",
    "No dates were detected in the content. Consider checking when this was originally published.",
)


class TemporalAnalyzer:
    """Score how current a piece of content is from the dates it mentions."""

    def analyze(
        self,
        text: str,
        *,
        published_date_hint: str | None = None,
        now: datetime | None = None,
    ) -> TemporalSignal:
        now = now or datetime.now(timezone.utc)

        hinted = parse_published_hint(published_date_hint)
        if hinted is not None:
            extracted = [ExtractedDate(value=hinted, pattern=DatePattern.PUBLISHED_HINT)]
        else:
            extracted = extract_dates(text)

        if not extracted:
            return TemporalSignal(score=NO_DATES.score, reason=NO_DATES.reason())

        ordered = sorted(extracted, key=lambda item: item.value)
        oldest, newest = ordered[0].value, ordered[-1].value
        oldest_age = age_in_days(oldest, now)
        newest_age = age_in_days(newest, now)

        rule = first_match(AGE_RULES, _AgeFacts(oldest_age=oldest_age, newest_age=newest_age))
        dates = []
        for item in ordered:
            days = age_in_days(item.value, now)
            dates.append(
                DatedReference(value=item.value, age_in_days=days, human_age=format_age(days), pattern=item.pattern)
            )

        return TemporalSignal(
            score=rule.outcome.score,
            reason=rule.outcome.reason(oldest=format_age(oldest_age), newest=format_age(newest_age)),
            dates_found=len(extracted),
            dates=dates,
            oldest_date=oldest,
            newest_date=newest,
            age_in_days=newest_age,
            is_outdated=rule.name == OUTDATED,
            is_very_old=rule.name == VERY_OLD,
            used_published_hint=hinted is not None,
        )
