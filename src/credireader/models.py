from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    """Immutable base; serialized with camelCase keys for the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ReasonType(str, Enum):
    NEGATIVE = "negative"
    WARNING = "warning"
    INFO = "info"
    POSITIVE = "positive"

    @property
    def priority(self) -> int:
        return _REASON_PRIORITY[self]


_REASON_PRIORITY = {
    ReasonType.NEGATIVE: 0,
    ReasonType.WARNING: 1,
    ReasonType.INFO: 2,
    ReasonType.POSITIVE: 3,
}


class Reason(_Model):
    type: ReasonType
    title: str
    description: str


class SignalResult(_Model):
    score: int
    reason: Reason | None = None


class DomainSignal(SignalResult):
    domain: str | None = None
    has_domain: bool = False
    is_trusted: bool = False
    is_suspicious: bool = False
    registered_domain: str | None = None


class EmotionalSignal(SignalResult):
    emotional_count: int = 0
    emotional_density: float = 0.0
    clickbait_count: int = 0
    found_emotional_words: list[str] = Field(default_factory=list)
    found_clickbait: list[str] = Field(default_factory=list)


class SensationalismSignal(SignalResult):
    caps_words_count: int = 0
    caps_percentage: float = 0.0
    exclamation_count: int = 0
    question_count: int = 0


class EvidenceQuality(str, Enum):
    STRONG = "strong"
    GOOD = "good"
    MODERATE = "moderate"
    WEAK = "weak"
    NONE = "none"


class EvidenceSignal(SignalResult):
    strong_count: int = 0
    vague_count: int = 0
    found_strong_evidence: list[str] = Field(default_factory=list)
    found_vague_evidence: list[str] = Field(default_factory=list)
    ai_red_flag_count: int = 0
    has_quotes: bool = False
    has_named_sources: bool = False
    has_statistics: bool = False
    has_urls: bool = False
    evidence_quality: EvidenceQuality = EvidenceQuality.NONE


class LanguageAnalysis(_Model):
    emotional: EmotionalSignal
    sensationalism: SensationalismSignal
    evidence: EvidenceSignal

    @property
    def total_score(self) -> int:
        return self.emotional.score + self.sensationalism.score + self.evidence.score


class DatePattern(str, Enum):
    MONTH_DAY_YEAR = "month_day_year"
    DAY_MONTH_YEAR = "day_month_year"
    ISO = "iso"
    SLASH_MDY = "slash_mdy"
    SLASH_DMY = "slash_dmy"
    YEAR_MENTION = "year_mention"
    YEAR_NOUN = "year_noun"
    PUBLISHED_HINT = "published_hint"


class ExtractedDate(_Model):
    value: date
    pattern: DatePattern


class DatedReference(_Model):
    value: date
    age_in_days: int
    human_age: str
    pattern: DatePattern


class TemporalSignal(SignalResult):
    dates_found: int = 0
    dates: list[DatedReference] = Field(default_factory=list)
    oldest_date: date | None = None
    newest_date: date | None = None
    age_in_days: int | None = None
    is_outdated: bool = False
    is_very_old: bool = False
    used_published_hint: bool = False


class FactCheckReview(_Model):
    publisher: str | None = None
    publisher_site: str | None = None
    url: str | None = None
    title: str | None = None
    rating: str | None = None
    rating_value: int | float | str | None = None
    review_date: str | None = None


class FactCheckClaim(_Model):
    text: str | None = None
    claimant: str | None = None
    claim_date: str | None = None
    reviews: list[FactCheckReview] = Field(default_factory=list)


class RatingLabel(str, Enum):
    TRUE = "true"
    FALSE = "false"
    MIXED = "mixed"
    UNVERIFIED = "unverified"
    OTHER = "other"


class RatingBadge(_Model):
    label: RatingLabel
    text: str | None
    color: str
    icon: str


class FactCheckMatch(_Model):
    claim: str | None = None
    claimant: str | None = None
    publisher: str | None = None
    publisher_site: str | None = None
    url: str
    title: str | None = None
    rating: str | None = None
    rating_badge: RatingBadge
    review_date: str | None = None


class SearchLink(_Model):
    name: str
    url: str
    icon: str
    description: str


class FactCheckSignal(SignalResult):
    has_api_key: bool = False
    skipped: bool = False
    queries_searched: list[str] = Field(default_factory=list)
    fact_checks: list[FactCheckMatch] = Field(default_factory=list)
    search_urls: list[SearchLink] = Field(default_factory=list)
    skipped_queries: list[str] = Field(default_factory=list)


class StatusTier(str, Enum):
    RELIABLE = "reliable"
    NEEDS_CAUTION = "needs_caution"
    SUSPICIOUS = "suspicious"


class AnalysisBreakdown(_Model):
    domain: DomainSignal
    emotional: EmotionalSignal
    sensationalism: SensationalismSignal
    evidence: EvidenceSignal
    temporal: TemporalSignal
    fact_check: FactCheckSignal
    raw_score: int


class CredibilityReport(_Model):
    score: int = Field(..., ge=0, le=100)
    status: StatusTier
    status_label: str
    status_color: str
    icon: str
    summary: str
    reasons: list[Reason] = Field(default_factory=list)
    thinking_prompts: list[str] = Field(default_factory=list, max_length=4)
    recommendation: str
    search_url: str
    fact_checks: FactCheckSignal
    analysis_breakdown: AnalysisBreakdown


class EvaluateOptions(_Model):
    published_date_hint: str | None = None
    skip_fact_check: bool = False
