from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import tldextract

from .data_loader import ReferenceLists, default_reference_lists
from .models import DomainSignal, ReasonType
from .rules import Outcome, Rule, always, first_match

logger = logging.getLogger(__name__)

URL_DOMAIN_PATTERN = re.compile(r"https?://(?:www\.)?([a-z0-9-]+(?:\.[a-z0-9-]+)+)", re.IGNORECASE)
BARE_DOMAIN_PATTERN = re.compile(
    r"\b(?:www\.)?([a-z0-9-]+\.(?:com|org|net|gov|edu|co\.uk|co\.in|in|io|news|info|biz|tv|me|us|ca|au)"
    r"(?:\.[a-z]{2,})?)\b",
    re.IGNORECASE,
)

# bundled public-suffix snapshot only, never fetched over the network
_SUFFIX_EXTRACTOR = tldextract.TLDExtract(suffix_list_urls=())


def extract_domain(text: str) -> str | None:
    """Return the first domain found in text, lower-cased and without ``www.``."""
    if not text:
        return None
    match = URL_DOMAIN_PATTERN.search(text) or BARE_DOMAIN_PATTERN.search(text)
    if not match:
        return None
    domain = match.group(1).lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def registered_domain(domain: str | None) -> str | None:
    if not domain:
        return None
    extracted = _SUFFIX_EXTRACTOR(domain)
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}"
    return None


@dataclass(frozen=True)
class _DomainFacts:
    domain: str | None
    is_trusted: bool
    is_suspicious: bool


CLASSIFICATION_RULES: tuple[Rule[_DomainFacts, Outcome], ...] = (
    Rule(
        "no-domain",
        lambda facts: facts.domain is None,
        Outcome(
            15,
            ReasonType.INFO,
            "No Source URL Detected",
            "No website link was found in the content. Consider checking if this "
            "information comes from a reliable source.",
        ),
    ),
    Rule(
        "trusted",
        lambda facts: facts.is_trusted,
        Outcome(
            30,
            ReasonType.POSITIVE,
            "Verified Source Domain",
            '"{domain}" is recognized as a trusted and established news source.',
        ),
    ),
    Rule(
        "suspicious",
        lambda facts: facts.is_suspicious,
        Outcome(
            0,
            ReasonType.NEGATIVE,
            "Suspicious Source Domain",
            '"{domain}" has been flagged for spreading unreliable content in the past.',
        ),
    ),
    Rule(
        "unknown",
        always,
        Outcome(
            15,
            ReasonType.WARNING,
            "Unknown Source Domain",
            '"{domain}" is not in our database of verified sources. Exercise caution.',
        ),
    ),
)


class DomainClassifier:
    """Classify the source domain of a submission as trusted, suspicious or unknown."""

    def __init__(self, reference: ReferenceLists | None = None) -> None:
        self._reference = reference or default_reference_lists()

    def is_trusted(self, domain: str | None) -> bool:
        if not domain:
            return False
        return any(domain == trusted or domain.endswith("." + trusted) for trusted in self._reference.trusted_domains)

    def is_suspicious(self, domain: str | None) -> bool:
        if not domain:
            return False
        if domain in self._reference.suspicious_domains:
            return True
        return any(pattern in domain for pattern in self._reference.suspicious_patterns)

    def classify(self, text: str) -> DomainSignal:
        domain = extract_domain(text)
        trusted = self.is_trusted(domain)
        facts = _DomainFacts(
            domain=domain,
            is_trusted=trusted,
            # trusted wins over suspicious, so the suspicious check is skipped
            is_suspicious=not trusted and self.is_suspicious(domain),
        )
        rule = first_match(CLASSIFICATION_RULES, facts)
        logger.debug("Domain %s classified as %s", domain, rule.name)
        return DomainSignal(
            score=rule.outcome.score,
            reason=rule.outcome.reason(domain=domain),
            domain=domain,
            has_domain=domain is not None,
            is_trusted=facts.is_trusted,
            is_suspicious=facts.is_suspicious,
            registered_domain=registered_domain(domain),
        )
