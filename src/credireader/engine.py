from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime

from .data_loader import ReferenceLists, default_reference_lists
from .domain import DomainClassifier
from .factcheck import FactCheckCorrelator
from .lexical import LexicalAnalyzer
from .models import CredibilityReport, EvaluateOptions
from .scoring import ScoringAggregator
from .temporal import TemporalAnalyzer

logger = logging.getLogger(__name__)


class EmptyTextError(ValueError):
    """Raised when evaluate() is called without any text to analyze."""


@dataclass
class CredibilityEngine:
    reference: ReferenceLists = field(default_factory=default_reference_lists)
    correlator: FactCheckCorrelator | None = None
    rng: random.Random | None = None

    def __post_init__(self) -> None:
        self.domain_classifier = DomainClassifier(self.reference)
        self.lexical_analyzer = LexicalAnalyzer(self.reference)
        self.temporal_analyzer = TemporalAnalyzer()
        self.aggregator = ScoringAggregator(self.reference, self.rng)
        if self.correlator is None:
            self.correlator = FactCheckCorrelator()

    async def evaluate(
        self,
        text: str,
        options: EvaluateOptions | None = None,
        *,
        now: datetime | None = None,
    ) -> CredibilityReport:
        if not text or not text.strip():
            raise EmptyTextError("text must not be empty")
        options = options or EvaluateOptions()

        domain = self.domain_classifier.classify(text)
        language = self.lexical_analyzer.analyze(text)
        temporal = self.temporal_analyzer.analyze(
            text,
            published_date_hint=options.published_date_hint,
            now=now,
        )
        fact_check = await self.correlator.correlate(text, skip=options.skip_fact_check)

        report = self.aggregator.aggregate(text, domain, language, temporal, fact_check)
        logger.info(
            "Analysis complete: score %d (%s), raw %d",
            report.score,
            report.status_label,
            report.analysis_breakdown.raw_score,
        )
        return report
