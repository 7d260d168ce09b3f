import pytest

from conftest import StubFactCheckClient
from credireader.engine import CredibilityEngine, EmptyTextError
from credireader.factcheck import FactCheckClient, FactCheckCorrelator
from credireader.models import EvaluateOptions, ReasonType, StatusTier


NEUTRAL_WITH_ATTRIBUTION = (
    "The city council approved a 5% increase in the library budget on Tuesday. "
    '"We are pleased with the outcome," the mayor said in a statement.'
)

TRUSTED_FRESH = (
    "https://www.reuters.com/world/health-update According to the World Health Organization, "
    "the study published in The Lancet on January 12, 2025 found a 12% drop in cases. "
    '"The data is encouraging," Dr. Maria Lopez told reporters.'
)


@pytest.fixture
def engine(packaged_lists, offline_correlator, rng):
    return CredibilityEngine(reference=packaged_lists, correlator=offline_correlator, rng=rng)


def component_sum(report):
    breakdown = report.analysis_breakdown
    return sum(
        signal.score
        for signal in (
            breakdown.domain,
            breakdown.emotional,
            breakdown.sensationalism,
            breakdown.evidence,
            breakdown.temporal,
            breakdown.fact_check,
        )
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   \n"])
async def test_empty_text_is_rejected(engine, text):
    with pytest.raises(EmptyTextError):
        await engine.evaluate(text)


@pytest.mark.asyncio
async def test_neutral_text_with_one_attribution(engine, now):
    report = await engine.evaluate(NEUTRAL_WITH_ATTRIBUTION, now=now)
    breakdown = report.analysis_breakdown

    assert breakdown.domain.score == 15
    assert breakdown.domain.reason.type is ReasonType.INFO
    assert breakdown.evidence.score >= 18
    assert breakdown.temporal.score == 0
    assert breakdown.temporal.reason.type is ReasonType.INFO
    assert breakdown.raw_score == component_sum(report)
    assert report.score == 78
    assert report.status is StatusTier.NEEDS_CAUTION


@pytest.mark.asyncio
async def test_shouting_text_is_sensational(engine, now):
    report = await engine.evaluate("THIS IS THE BIGGEST SCANDAL EVER!!!!!!!!", now=now)
    sensationalism = report.analysis_breakdown.sensationalism
    assert sensationalism.score == 0
    assert sensationalism.reason.type is ReasonType.NEGATIVE
    assert report.reasons[0].type is ReasonType.NEGATIVE


@pytest.mark.asyncio
async def test_trusted_fresh_well_sourced_story_is_reliable(engine, now):
    report = await engine.evaluate(TRUSTED_FRESH, now=now)
    assert report.analysis_breakdown.domain.is_trusted
    assert report.analysis_breakdown.temporal.score == 5
    assert report.score >= 80
    assert report.status is StatusTier.RELIABLE


@pytest.mark.asyncio
async def test_missing_fact_check_key_still_completes(packaged_lists, now):
    engine = CredibilityEngine(reference=packaged_lists, correlator=FactCheckCorrelator(FactCheckClient(api_key="")))
    report = await engine.evaluate(NEUTRAL_WITH_ATTRIBUTION, now=now)
    assert report.fact_checks.score == 0
    assert not report.fact_checks.has_api_key
    assert len(report.fact_checks.search_urls) == 6


@pytest.mark.asyncio
async def test_skip_fact_check_option(packaged_lists, now):
    client = StubFactCheckClient()
    engine = CredibilityEngine(reference=packaged_lists, correlator=FactCheckCorrelator(client))
    report = await engine.evaluate(NEUTRAL_WITH_ATTRIBUTION, EvaluateOptions(skip_fact_check=True), now=now)
    assert client.queries == []
    assert report.fact_checks.skipped
    assert report.fact_checks.search_urls


@pytest.mark.asyncio
async def test_published_hint_is_forwarded(engine, now):
    report = await engine.evaluate(
        NEUTRAL_WITH_ATTRIBUTION,
        EvaluateOptions(published_date_hint="2025-01-14"),
        now=now,
    )
    temporal = report.analysis_breakdown.temporal
    assert temporal.used_published_hint
    assert temporal.score == 5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "text",
    [
        NEUTRAL_WITH_ATTRIBUTION,
        TRUSTED_FRESH,
        "SHOCKING!!! You won't believe what they don't want you to know! Sources say it's a disaster!!!",
        "Visit https://infowars.com/story back in 2015, experts say the crisis is hidden.",
        "A quiet day.",
    ],
)
async def test_report_invariants(engine, now, text):
    report = await engine.evaluate(text, now=now)
    assert isinstance(report.score, int)
    assert 0 <= report.score <= 100
    priorities = [r.type.priority for r in report.reasons]
    assert priorities == sorted(priorities)
    urls = [match.url for match in report.fact_checks.fact_checks]
    assert len(urls) == len(set(urls))
    assert len(report.thinking_prompts) <= 4


@pytest.mark.asyncio
async def test_evaluate_is_deterministic_apart_from_prompts(packaged_lists, now):
    def fresh_engine():
        return CredibilityEngine(
            reference=packaged_lists,
            correlator=FactCheckCorrelator(StubFactCheckClient(has_api_key=False)),
        )

    first = await fresh_engine().evaluate(TRUSTED_FRESH, now=now)
    second = await fresh_engine().evaluate(TRUSTED_FRESH, now=now)
    assert first.model_dump(exclude={"thinking_prompts"}) == second.model_dump(exclude={"thinking_prompts"})
