"""
Reference-list loader for the credibility analyzers.

Domain reputation lists, the lexicon and the thinking-prompt pools live as JSON
files under ``credireader/data``. They are loaded once into an immutable
``ReferenceLists`` value that is passed to every analyzer.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .config import get_settings

logger = logging.getLogger(__name__)

PACKAGED_DATA_DIR = Path(__file__).resolve().parent / "data"

PROMPT_CATEGORIES = ("emotional", "source", "evidence", "recency", "general")


def load_json(path: Path) -> Any:
    """Load a JSON file with UTF-8 encoding."""
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _dedup_list(values: Iterable[Any]) -> list[Any]:
    seen = set()
    output: list[Any] = []
    for val in values:
        if val in seen:
            continue
        seen.add(val)
        output.append(val)
    return output


def _normalized(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(_dedup_list(str(v).strip().lower() for v in values if str(v).strip()))


def load_datasets(data_dir: str | os.PathLike[str]) -> dict[str, Any]:
    """Load every JSON file in data_dir into a dict keyed by file stem."""
    data_path = Path(data_dir)
    datasets: dict[str, Any] = {}

    if not data_path.exists():
        logger.warning("Data directory %s does not exist; using empty datasets", data_path)
        return datasets

    for fname in sorted(data_path.glob("*.json")):
        try:
            datasets[fname.stem] = load_json(fname)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load dataset %s: %s", fname, exc)
    return datasets


@dataclass(frozen=True)
class ReferenceLists:
    """Read-only reference data shared by the analyzers."""

    trusted_domains: tuple[str, ...] = ()
    suspicious_domains: frozenset[str] = frozenset()
    suspicious_patterns: tuple[str, ...] = ()
    emotional_words: tuple[str, ...] = ()
    clickbait_phrases: tuple[str, ...] = ()
    vague_evidence_phrases: tuple[str, ...] = ()
    strong_evidence_indicators: tuple[str, ...] = ()
    ai_red_flags: tuple[str, ...] = ()
    thinking_prompts: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def prompt_pool(self, category: str) -> tuple[str, ...]:
        return self.thinking_prompts.get(category, ())

    @classmethod
    def from_datasets(cls, datasets: Mapping[str, Any]) -> "ReferenceLists":
        trusted = datasets.get("trusted_sources") or {}
        suspicious = datasets.get("suspicious_sources") or {}
        lexicon = datasets.get("lexicon") or {}
        prompts = datasets.get("thinking_prompts") or {}

        prompt_pools = {}
        for category in PROMPT_CATEGORIES:
            values = prompts.get(category) if isinstance(prompts, dict) else None
            # prompts keep their original casing
            prompt_pools[category] = tuple(_dedup_list(str(v) for v in values or []))

        return cls(
            trusted_domains=_normalized(trusted.get("domains")),
            suspicious_domains=frozenset(_normalized(suspicious.get("domains"))),
            suspicious_patterns=_normalized(suspicious.get("suspicious_patterns")),
            emotional_words=_normalized(lexicon.get("emotional_words")),
            clickbait_phrases=_normalized(lexicon.get("clickbait_phrases")),
            vague_evidence_phrases=_normalized(lexicon.get("vague_evidence_phrases")),
            strong_evidence_indicators=_normalized(lexicon.get("strong_evidence_indicators")),
            ai_red_flags=_normalized(lexicon.get("ai_red_flags")),
            thinking_prompts=MappingProxyType(prompt_pools),
        )


def load_reference_lists(data_dir: str | os.PathLike[str] | None = None) -> ReferenceLists:
    """
    Build ReferenceLists from the packaged JSON files.
    Files found in data_dir replace the packaged file with the same stem.
    """
    datasets = load_datasets(PACKAGED_DATA_DIR)
    if data_dir:
        datasets.update(load_datasets(data_dir))

    lists = ReferenceLists.from_datasets(datasets)
    logger.info(
        "Loaded reference lists (trusted: %d, suspicious: %d domains / %d patterns, lexicon terms: %d)",
        len(lists.trusted_domains),
        len(lists.suspicious_domains),
        len(lists.suspicious_patterns),
        len(lists.emotional_words)
        + len(lists.clickbait_phrases)
        + len(lists.vague_evidence_phrases)
        + len(lists.strong_evidence_indicators)
        + len(lists.ai_red_flags),
    )
    return lists


@lru_cache(1)
def default_reference_lists() -> ReferenceLists:
    return load_reference_lists(get_settings().data_dir)
