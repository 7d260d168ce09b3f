"""
Lexical and stylistic analysis: emotional tone, sensationalism and evidence quality.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .data_loader import ReferenceLists, default_reference_lists
from .models import (
    EmotionalSignal,
    EvidenceQuality,
    EvidenceSignal,
    LanguageAnalysis,
    ReasonType,
    SensationalismSignal,
)
from .rules import Outcome, Rule, always, first_match

EMOTIONAL_MAX = 25
SENSATIONALISM_MAX = 20
EVIDENCE_MAX = 25
AI_RED_FLAG_THRESHOLD = 3
AI_RED_FLAG_PENALTY = 8

QUOTE_PATTERN = re.compile(r"[\"“][^\"“”]*?[\"”]|‘[^‘’]*?’")
NAMED_ENTITY_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")
STATISTIC_PATTERN = re.compile(r"\d+%|\d+\s*(?:percent|million|billion|thousand)", re.IGNORECASE)
URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)
NON_LETTERS = re.compile(r"[^A-Za-z]")


@dataclass(frozen=True)
class _ToneFacts:
    density: float
    clickbait_count: int


@dataclass(frozen=True)
class _StyleFacts:
    caps_percentage: float
    exclamation_count: int


@dataclass(frozen=True)
class _EvidenceFacts:
    strong_count: int
    vague_count: int
    has_quotes: bool
    has_named_sources: bool
    has_statistics: bool
    has_urls: bool


TONE_RULES: tuple[Rule[_ToneFacts, Outcome], ...] = (
    Rule(
        "heavy",
        lambda f: f.density > 5 or f.clickbait_count >= 2,
        Outcome(0, ReasonType.NEGATIVE, "Emotional Language Detected"),
    ),
    Rule(
        "moderate",
        lambda f: f.density > 2 or f.clickbait_count >= 1,
        Outcome(12, ReasonType.WARNING, "Emotional Language Detected"),
    ),
    Rule("neutral", always, Outcome(EMOTIONAL_MAX)),
)

STYLE_RULES: tuple[Rule[_StyleFacts, Outcome], ...] = (
    Rule(
        "heavy",
        lambda f: f.caps_percentage > 10 or f.exclamation_count > 5,
        Outcome(0, ReasonType.NEGATIVE, "Sensational Writing Style"),
    ),
    Rule(
        "moderate",
        lambda f: f.caps_percentage > 5 or f.exclamation_count > 2,
        Outcome(10, ReasonType.WARNING, "Sensational Writing Style"),
    ),
    Rule("measured", always, Outcome(SENSATIONALISM_MAX)),
)

EVIDENCE_RULES: tuple[Rule[_EvidenceFacts, tuple[EvidenceQuality, Outcome]], ...] = (
    Rule(
        "strong",
        lambda f: f.strong_count >= 2 and (f.has_quotes or f.has_named_sources or f.has_urls),
        (
            EvidenceQuality.STRONG,
            Outcome(
                25,
                ReasonType.POSITIVE,
                "Strong Evidence Present",
                "The content cites specific sources, named experts, or provides verifiable data points.",
            ),
        ),
    ),
    Rule(
        "good",
        lambda f: f.strong_count >= 1 and f.has_statistics,
        (
            EvidenceQuality.GOOD,
            Outcome(
                18,
                ReasonType.POSITIVE,
                "Evidence and Sources Present",
                "The content references specific sources with supporting data.",
            ),
        ),
    ),
    Rule(
        "moderate",
        lambda f: f.vague_count >= 2 and f.has_quotes and f.has_named_sources,
        (
            EvidenceQuality.MODERATE,
            Outcome(
                12,
                ReasonType.INFO,
                "Limited Evidence Present",
                "Some references to sources exist, but verification is recommended.",
            ),
        ),
    ),
    Rule(
        "weak",
        lambda f: f.vague_count >= 1 or f.has_statistics,
        (
            EvidenceQuality.WEAK,
            Outcome(
                6,
                ReasonType.WARNING,
                "Vague or Unverifiable Sources",
                "Limited evidence present. Verify claims independently.",
            ),
        ),
    ),
    Rule(
        "none",
        always,
        (
            EvidenceQuality.NONE,
            Outcome(
                0,
                ReasonType.NEGATIVE,
                "No Verifiable Sources",
                "The content does not cite any specific, verifiable sources. Treat claims with skepticism.",
            ),
        ),
    ),
)


def _phrases_in(lower_text: str, phrases: tuple[str, ...]) -> list[str]:
    return [phrase for phrase in phrases if phrase in lower_text]


def _is_caps_word(word: str) -> bool:
    cleaned = NON_LETTERS.sub("", word)
    return len(cleaned) >= 3 and cleaned == cleaned.upper()


class LexicalAnalyzer:
    """Score how a text is written, independent of where it came from."""

    def __init__(self, reference: ReferenceLists | None = None) -> None:
        self._reference = reference or default_reference_lists()
        self._word_patterns = tuple(
            (word, re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE))
            for word in self._reference.emotional_words
        )

    def analyze(self, text: str) -> LanguageAnalysis:
        return LanguageAnalysis(
            emotional=self.emotional_tone(text),
            sensationalism=self.sensationalism(text),
            evidence=self.evidence(text),
        )

    def emotional_tone(self, text: str) -> EmotionalSignal:
        lower_text = text.lower()
        total_words = len(lower_text.split())

        emotional_count = 0
        found_words: list[str] = []
        for word, pattern in self._word_patterns:
            hits = len(pattern.findall(lower_text))
            if hits:
                emotional_count += hits
                found_words.append(word)

        found_clickbait = _phrases_in(lower_text, self._reference.clickbait_phrases)
        density = (emotional_count / total_words) * 100 if total_words else 0.0

        outcome = first_match(TONE_RULES, _ToneFacts(density, len(found_clickbait))).outcome
        if found_words:
            quoted = '", "'.join(found_words[:3])
            description = f'Uses emotionally charged words like "{quoted}" which may influence your judgment.'
        else:
            description = "Contains clickbait phrases designed to provoke strong reactions."

        return EmotionalSignal(
            score=outcome.score,
            reason=outcome.reason(description),
            emotional_count=emotional_count,
            emotional_density=round(density, 2),
            clickbait_count=len(found_clickbait),
            found_emotional_words=found_words[:5],
            found_clickbait=found_clickbait,
        )

    def sensationalism(self, text: str) -> SensationalismSignal:
        words = text.split()
        caps_words = [word for word in words if _is_caps_word(word)]
        exclamation_count = text.count("!")
        caps_percentage = (len(caps_words) / len(words)) * 100 if words else 0.0

        outcome = first_match(STYLE_RULES, _StyleFacts(caps_percentage, exclamation_count)).outcome
        issues = []
        if caps_percentage > 5:
            issues.append("excessive ALL CAPS text")
        if exclamation_count > 2:
            issues.append("multiple exclamation marks")
        description = (
            f"The text contains {' and '.join(issues)}, which is often used to exaggerate importance."
        )

        return SensationalismSignal(
            score=outcome.score,
            reason=outcome.reason(description),
            caps_words_count=len(caps_words),
            caps_percentage=round(caps_percentage, 2),
            exclamation_count=exclamation_count,
            question_count=text.count("?"),
        )

    def evidence(self, text: str) -> EvidenceSignal:
        lower_text = text.lower()
        found_vague = _phrases_in(lower_text, self._reference.vague_evidence_phrases)
        found_strong = _phrases_in(lower_text, self._reference.strong_evidence_indicators)
        ai_red_flag_count = len(_phrases_in(lower_text, self._reference.ai_red_flags))

        facts = _EvidenceFacts(
            strong_count=len(found_strong),
            vague_count=len(found_vague),
            has_quotes=bool(QUOTE_PATTERN.search(text)),
            has_named_sources=len(NAMED_ENTITY_PATTERN.findall(text)) >= 2,
            has_statistics=bool(STATISTIC_PATTERN.search(text)),
            has_urls=bool(URL_PATTERN.search(text)),
        )
        quality, outcome = first_match(EVIDENCE_RULES, facts).outcome

        score = outcome.score
        if ai_red_flag_count >= AI_RED_FLAG_THRESHOLD:
            score = max(0, score - AI_RED_FLAG_PENALTY)

        description = None
        if quality is EvidenceQuality.WEAK and found_vague:
            description = (
                f'Uses vague phrases like "{found_vague[0]}" without naming specific sources. '
                "This is a common pattern in misinformation."
            )

        return EvidenceSignal(
            score=score,
            reason=outcome.reason(description),
            strong_count=facts.strong_count,
            vague_count=facts.vague_count,
            found_strong_evidence=found_strong[:5],
            found_vague_evidence=found_vague[:5],
            ai_red_flag_count=ai_red_flag_count,
            has_quotes=facts.has_quotes,
            has_named_sources=facts.has_named_sources,
            has_statistics=facts.has_statistics,
            has_urls=facts.has_urls,
            evidence_quality=quality,
        )
