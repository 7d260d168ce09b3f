import sys
from pathlib import Path
import os
import random
from datetime import datetime, timezone
from types import MappingProxyType

import pytest


# Ensure project src is on path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

# Keep tests offline: no fact-check key unless a test injects one
os.environ["FACT_CHECK_API_KEY"] = ""

from credireader.data_loader import ReferenceLists, load_reference_lists  # noqa: E402
from credireader.factcheck import FactCheckCorrelator, QueryOk, QuerySkipped  # noqa: E402
from credireader.models import FactCheckClaim, FactCheckReview  # noqa: E402


FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(scope="session")
def packaged_lists():
    return load_reference_lists()


@pytest.fixture
def fixture_lists():
    """Small hand-written lists so tests do not depend on the packaged data."""
    return ReferenceLists(
        trusted_domains=("reuters.com", "bbc.co.uk", "who.int"),
        suspicious_domains=frozenset({"infowars.com"}),
        suspicious_patterns=("fakenews", ".com.co"),
        emotional_words=("shocking", "outrageous", "horrifying"),
        clickbait_phrases=("you won't believe", "what happened next"),
        vague_evidence_phrases=("sources say", "experts believe", "many people are saying"),
        strong_evidence_indicators=("according to", "published in", "data shows"),
        ai_red_flags=("it is important to note", "in conclusion", "furthermore", "delve"),
        thinking_prompts=MappingProxyType(
            {
                "emotional": ("E1", "E2"),
                "source": ("S1", "S2"),
                "evidence": ("V1", "V2"),
                "recency": ("R1",),
                "general": ("G1", "G2", "G3"),
            }
        ),
    )


def make_review(url, rating, publisher="PolitiFact"):
    return FactCheckReview(publisher=publisher, url=url, rating=rating, title=f"Review {url}")


def make_claim(*reviews, text="Claim text"):
    return FactCheckClaim(text=text, claimant="Someone", reviews=list(reviews))


class StubFactCheckClient:
    """Returns queued outcomes in order and records every query."""

    def __init__(self, outcomes=None, *, has_api_key=True):
        self.outcomes = list(outcomes or [])
        self.queries = []
        self.has_api_key = has_api_key

    async def search(self, query):
        self.queries.append(query)
        if self.outcomes:
            return self.outcomes.pop(0)
        return QueryOk([])


@pytest.fixture
def stub_client():
    return StubFactCheckClient()


@pytest.fixture
def offline_correlator():
    return FactCheckCorrelator(
        StubFactCheckClient([QuerySkipped("no API key")] * 3, has_api_key=False)
    )
