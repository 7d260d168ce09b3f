from credireader.lexical import LexicalAnalyzer
from credireader.models import EvidenceQuality, ReasonType


def test_neutral_text_scores_full_marks(fixture_lists):
    analysis = LexicalAnalyzer(fixture_lists).analyze("The council met on Tuesday to review the budget.")
    assert analysis.emotional.score == 25
    assert analysis.emotional.reason is None
    assert analysis.sensationalism.score == 20
    assert analysis.sensationalism.reason is None


def test_heavy_emotional_language(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).emotional_tone("Shocking and outrageous news")
    assert signal.score == 0
    assert signal.reason.type is ReasonType.NEGATIVE
    assert "shocking" in signal.reason.description
    assert signal.found_emotional_words == ["shocking", "outrageous"]


def test_moderate_emotional_density(fixture_lists):
    # one charged word in forty is a 2.5% density
    text = "shocking " + "word " * 39
    signal = LexicalAnalyzer(fixture_lists).emotional_tone(text)
    assert signal.emotional_density == 2.5
    assert signal.score == 12
    assert signal.reason.type is ReasonType.WARNING


def test_clickbait_without_emotional_words(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).emotional_tone(
        "You won't believe what happened next at the county fair"
    )
    assert signal.clickbait_count == 2
    assert signal.score == 0
    assert "clickbait" in signal.reason.description


def test_all_caps_with_exclamations_is_sensational(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).sensationalism("THIS IS THE BIGGEST SCANDAL EVER!!!!!!!!")
    assert signal.score == 0
    assert signal.reason.type is ReasonType.NEGATIVE
    assert signal.exclamation_count == 8
    assert "ALL CAPS" in signal.reason.description
    assert "exclamation" in signal.reason.description


def test_a_few_exclamations_is_a_warning(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).sensationalism("Great game today! What a finish! Amazing!")
    assert signal.score == 10
    assert signal.reason.type is ReasonType.WARNING
    assert signal.caps_words_count == 0


def test_strong_evidence(fixture_lists):
    text = 'According to a report published in Nature, the minister said "we are ready".'
    signal = LexicalAnalyzer(fixture_lists).evidence(text)
    assert signal.evidence_quality is EvidenceQuality.STRONG
    assert signal.score == 25
    assert signal.has_quotes


def test_good_evidence_needs_statistics(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).evidence("Data shows unemployment fell to 4% last month.")
    assert signal.evidence_quality is EvidenceQuality.GOOD
    assert signal.score == 18


def test_vague_sources_are_weak(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).evidence("Sources say the plan will fail.")
    assert signal.evidence_quality is EvidenceQuality.WEAK
    assert signal.score == 6
    assert '"sources say"' in signal.reason.description


def test_no_evidence(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).evidence("The plan will fail.")
    assert signal.evidence_quality is EvidenceQuality.NONE
    assert signal.score == 0
    assert signal.reason.type is ReasonType.NEGATIVE


def test_ai_red_flags_reduce_evidence_score(fixture_lists):
    text = (
        "It is important to note that, according to officials, the study published in Science "
        'found "clear results". Furthermore, in conclusion, more work is needed.'
    )
    signal = LexicalAnalyzer(fixture_lists).evidence(text)
    assert signal.ai_red_flag_count == 3
    assert signal.evidence_quality is EvidenceQuality.STRONG
    assert signal.score == 17


def test_penalty_never_goes_below_zero(fixture_lists):
    text = "It is important to note this. Furthermore, in conclusion, we delve deeper."
    signal = LexicalAnalyzer(fixture_lists).evidence(text)
    assert signal.ai_red_flag_count == 4
    assert signal.score == 0


def test_apostrophes_are_not_quotes(fixture_lists):
    signal = LexicalAnalyzer(fixture_lists).evidence("It's the council's plan.")
    assert not signal.has_quotes


def test_language_total_score(fixture_lists):
    analysis = LexicalAnalyzer(fixture_lists).analyze("The plan will fail.")
    assert analysis.total_score == 25 + 20 + 0
