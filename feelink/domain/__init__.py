"""
Feelink Domain Layer
Decision logic and domain models
"""

from __future__ import annotations

from .models import (
    ActivitySource,
    ActivitySuggestion,
    AnalysisMethod,
    EmotionCategory,
    EnsembleDecision,
    KeywordVoteTally,
    RemoteClassification,
    SessionRecord,
)

__all__ = [
    "EmotionCategory",
    "AnalysisMethod",
    "KeywordVoteTally",
    "RemoteClassification",
    "EnsembleDecision",
    "ActivitySource",
    "ActivitySuggestion",
    "SessionRecord",
]
