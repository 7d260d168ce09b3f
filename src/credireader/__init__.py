"""Heuristic credibility scoring for news text."""

from .engine import CredibilityEngine, EmptyTextError
from .models import CredibilityReport, EvaluateOptions

__version__ = "1.0.0"

__all__ = ["CredibilityEngine", "CredibilityReport", "EmptyTextError", "EvaluateOptions", "__version__"]
