"""
Scoring aggregator.

Combines the six signals into a clamped 0-100 score, a status tier, sorted
reasons, templated summary/recommendation text and a small set of critical
thinking prompts. Performs no I/O.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from urllib.parse import quote

from .data_loader import ReferenceLists, default_reference_lists
from .models import (
    AnalysisBreakdown,
    CredibilityReport,
    DomainSignal,
    FactCheckSignal,
    LanguageAnalysis,
    Reason,
    SignalResult,
    StatusTier,
    TemporalSignal,
)
from .rules import Rule, always, first_match

MAX_PROMPTS = 4
SEARCH_WORD_LIMIT = 10
NON_WORD = re.compile(r"[^\w\s]")


@dataclass(frozen=True)
class StatusInfo:
    status: StatusTier
    label: str
    color: str
    icon: str


STATUS_RULES: tuple[Rule[int, StatusInfo], ...] = (
    Rule("reliable", lambda score: score >= 80, StatusInfo(StatusTier.RELIABLE, "Likely Reliable", "green", "verified")),
    Rule(
        "needs-caution",
        lambda score: score >= 50,
        StatusInfo(StatusTier.NEEDS_CAUTION, "Needs Caution", "yellow", "warning"),
    ),
    Rule("suspicious", always, StatusInfo(StatusTier.SUSPICIOUS, "Suspicious", "red", "error")),
)

RECOMMENDATIONS = {
    StatusTier.RELIABLE: (
        "This content appears reliable, but we always encourage verifying important information "
        "with multiple sources."
    ),
    StatusTier.NEEDS_CAUTION: (
        "We recommend cross-checking this information with established news organizations "
        "before sharing it on social media."
    ),
    StatusTier.SUSPICIOUS: (
        "Please verify this information thoroughly with official sources before believing or sharing. "
        "Consider checking fact-checking websites."
    ),
}
VERY_OLD_CAVEAT = "Parts of this content are more than two years old, so look for more recent reporting on the topic."


def get_status(score: int) -> StatusInfo:
    return first_match(STATUS_RULES, score).outcome


def sort_reasons(reasons: list[Reason]) -> list[Reason]:
    """Order reasons negative, warning, info, positive; ties keep their original order."""
    return sorted(reasons, key=lambda reason: reason.type.priority)


def join_issues(issues: list[str]) -> str:
    if not issues:
        return "several minor concerns"
    if len(issues) == 1:
        return issues[0]
    return f"{', '.join(issues[:-1])} and {issues[-1]}"


def build_search_url(text: str) -> str:
    words = [word for word in NON_WORD.sub("", text).split() if len(word) > 3]
    query = " ".join(words[:SEARCH_WORD_LIMIT])
    return f"https://news.google.com/search?q={quote(query, safe='')}"


class ScoringAggregator:
    """Turn independently computed signals into a CredibilityReport."""

    def __init__(self, reference: ReferenceLists | None = None, rng: random.Random | None = None) -> None:
        self._reference = reference or default_reference_lists()
        self._rng = rng or random.Random()

    def aggregate(
        self,
        text: str,
        domain: DomainSignal,
        language: LanguageAnalysis,
        temporal: TemporalSignal,
        fact_check: FactCheckSignal,
    ) -> CredibilityReport:
        signals: list[SignalResult] = [
            domain,
            language.emotional,
            language.sensationalism,
            language.evidence,
            temporal,
            fact_check,
        ]
        raw_score = sum(signal.score for signal in signals)
        score = round(min(100, max(0, raw_score)))
        status = get_status(score)

        reasons = sort_reasons([signal.reason for signal in signals if signal.reason is not None])

        return CredibilityReport(
            score=score,
            status=status.status,
            status_label=status.label,
            status_color=status.color,
            icon=status.icon,
            summary=self.summarize(status.status, domain, language, temporal),
            reasons=reasons,
            thinking_prompts=self.select_prompts(domain, language, temporal),
            recommendation=self.recommend(status.status, temporal),
            search_url=build_search_url(text),
            fact_checks=fact_check,
            analysis_breakdown=AnalysisBreakdown(
                domain=domain,
                emotional=language.emotional,
                sensationalism=language.sensationalism,
                evidence=language.evidence,
                temporal=temporal,
                fact_check=fact_check,
                raw_score=raw_score,
            ),
        )

    def summarize(
        self,
        status: StatusTier,
        domain: DomainSignal,
        language: LanguageAnalysis,
        temporal: TemporalSignal,
    ) -> str:
        if status is StatusTier.RELIABLE:
            if domain.is_trusted:
                return (
                    "This content appears credible and comes from a trusted source. "
                    "The writing style is professional and evidence-based."
                )
            return "This content shows signs of reliable reporting with professional language and cited sources."

        if status is StatusTier.SUSPICIOUS:
            return (
                "This content shows multiple warning signs that suggest low credibility. "
                "Please verify thoroughly before trusting or sharing."
            )

        issues = []
        if domain.has_domain and not domain.is_trusted:
            issues.append("unknown source")
        if language.emotional.score < 25:
            issues.append("emotional language")
        if language.evidence.score < 25:
            issues.append("limited evidence")
        if temporal.is_outdated or temporal.is_very_old:
            issues.append("older publication")
        return (
            f"This content shows mixed credibility signals including {join_issues(issues)}. "
            "We recommend verifying with additional sources."
        )

    def select_prompts(self, domain: DomainSignal, language: LanguageAnalysis, temporal: TemporalSignal) -> list[str]:
        categories = []
        if language.emotional.score < 25:
            categories.append("emotional")
        if not domain.is_trusted:
            categories.append("source")
        if language.evidence.score < 25:
            categories.append("evidence")
        if temporal.is_outdated or temporal.is_very_old:
            categories.append("recency")
        categories.append("general")

        prompts = []
        for category in categories:
            pool = self._reference.prompt_pool(category)
            if pool:
                prompts.append(self._rng.choice(pool))
        return list(dict.fromkeys(prompts))[:MAX_PROMPTS]

    @staticmethod
    def recommend(status: StatusTier, temporal: TemporalSignal) -> str:
        recommendation = RECOMMENDATIONS[status]
        if temporal.is_very_old:
            recommendation = f"{recommendation} {VERY_OLD_CAVEAT}"
        return recommendation
