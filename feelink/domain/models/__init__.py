"""
Domain Models
"""

from .activity import (
    FALLBACK_BANK,
    ActivitySource,
    ActivitySuggestion,
    fallback_for,
)
from .emotion import (
    VOTING_CATEGORIES,
    AnalysisMethod,
    EmotionCategory,
    EnsembleDecision,
    KeywordVoteTally,
    RemoteClassification,
    map_remote_label,
)
from .session import (
    SessionRecord,
    hash_user,
)

__all__ = [
    # Emotion
    "EmotionCategory",
    "AnalysisMethod",
    "VOTING_CATEGORIES",
    "KeywordVoteTally",
    "RemoteClassification",
    "EnsembleDecision",
    "map_remote_label",
    # Activity
    "ActivitySource",
    "ActivitySuggestion",
    "FALLBACK_BANK",
    "fallback_for",
    # Session
    "SessionRecord",
    "hash_user",
]
