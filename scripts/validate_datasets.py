#!/usr/bin/env python3
"""
Quick validation for the reference-list JSON files.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from credireader.data_loader import PROMPT_CATEGORIES, load_reference_lists  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate credibility reference lists.")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory with override JSON files (default: packaged data only)",
    )
    parser.add_argument("--manifest", help="Optional path for a JSON manifest of list sizes")
    args = parser.parse_args()

    lists = load_reference_lists(args.data_dir)
    sizes = {
        "trusted_domains": len(lists.trusted_domains),
        "suspicious_domains": len(lists.suspicious_domains),
        "suspicious_patterns": len(lists.suspicious_patterns),
        "emotional_words": len(lists.emotional_words),
        "clickbait_phrases": len(lists.clickbait_phrases),
        "vague_evidence_phrases": len(lists.vague_evidence_phrases),
        "strong_evidence_indicators": len(lists.strong_evidence_indicators),
        "ai_red_flags": len(lists.ai_red_flags),
    }
    sizes.update({f"prompts.{category}": len(lists.prompt_pool(category)) for category in PROMPT_CATEGORIES})

    for name, size in sizes.items():
        print(f" - {name}: {size} entries")

    problems = []
    overlap = sorted(set(lists.trusted_domains) & lists.suspicious_domains)
    if overlap:
        problems.append(f"domains listed as both trusted and suspicious: {', '.join(overlap)}")
    shadowed = sorted(d for d in lists.trusted_domains if any(p in d for p in lists.suspicious_patterns))
    if shadowed:
        problems.append(f"trusted domains matching a suspicious pattern: {', '.join(shadowed)}")
    problems.extend(f"empty list: {name}" for name, size in sizes.items() if size == 0)

    if args.manifest:
        Path(args.manifest).write_text(json.dumps(sizes, indent=2), encoding="utf-8")
        print(f"\nManifest written to {args.manifest}")

    if problems:
        print("\nProblems found:")
        for problem in problems:
            print(f" - {problem}")
        return 1
    print("\nReference lists look consistent")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
