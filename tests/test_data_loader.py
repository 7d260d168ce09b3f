import json
from dataclasses import FrozenInstanceError

import pytest

from credireader.data_loader import PROMPT_CATEGORIES, load_datasets, load_reference_lists


def test_packaged_lists_are_populated(packaged_lists):
    assert "reuters.com" in packaged_lists.trusted_domains
    assert "infowars.com" in packaged_lists.suspicious_domains
    assert packaged_lists.emotional_words
    assert packaged_lists.strong_evidence_indicators
    for category in PROMPT_CATEGORIES:
        assert packaged_lists.prompt_pool(category), category


def test_packaged_terms_are_lowercase(packaged_lists):
    for values in (
        packaged_lists.trusted_domains,
        packaged_lists.emotional_words,
        packaged_lists.clickbait_phrases,
        packaged_lists.vague_evidence_phrases,
    ):
        assert all(value == value.lower() for value in values)


def test_trusted_and_suspicious_lists_do_not_overlap(packaged_lists):
    assert not set(packaged_lists.trusted_domains) & packaged_lists.suspicious_domains


def test_data_dir_overrides_by_file_name(tmp_path, packaged_lists):
    (tmp_path / "trusted_sources.json").write_text(
        json.dumps({"domains": ["Example.COM", "example.com", " "]}), encoding="utf-8"
    )
    lists = load_reference_lists(tmp_path)
    assert lists.trusted_domains == ("example.com",)
    assert lists.emotional_words == packaged_lists.emotional_words


def test_broken_override_falls_back_to_packaged(tmp_path, packaged_lists, caplog):
    (tmp_path / "lexicon.json").write_text("{not json", encoding="utf-8")
    with caplog.at_level("WARNING"):
        lists = load_reference_lists(tmp_path)
    assert lists.emotional_words == packaged_lists.emotional_words
    assert "Failed to load dataset" in caplog.text


def test_missing_data_dir_is_reported(tmp_path, caplog):
    with caplog.at_level("WARNING"):
        assert load_datasets(tmp_path / "missing") == {}
    assert "does not exist" in caplog.text


def test_reference_lists_are_immutable(packaged_lists):
    with pytest.raises(FrozenInstanceError):
        packaged_lists.trusted_domains = ()
    with pytest.raises(TypeError):
        packaged_lists.thinking_prompts["general"] = ("x",)
