"""
Feelink - text emotion classifier

Turns free-form text into one of five emotions with a confidence score
and a suggested coping activity:
- keyword votes per locale (English, Thai)
- general-purpose sentiment score
- optional hosted emotion model under a monthly quota
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("feelink")
except PackageNotFoundError:
    __version__ = "0.0.0"

# ===== Domain Models =====
from .domain.models import (
    ActivitySource,
    ActivitySuggestion,
    AnalysisMethod,
    EmotionCategory,
    EnsembleDecision,
    KeywordVoteTally,
    RemoteClassification,
    SessionRecord,
)

# ===== Domain Services =====
from .domain.services import (
    ActivityResolver,
    EmotionAnalyzer,
    KeywordVoter,
    RemoteClassifierGateway,
    SentimentScorer,
    decide,
    detect_language,
)


# ===== API (lazy import) =====
def get_app():
    from .api import app

    return app


def create_app():
    from .api import create_app as _create_app

    return _create_app()


__all__ = [
    "__version__",
    # Domain Models
    "EmotionCategory",
    "AnalysisMethod",
    "KeywordVoteTally",
    "RemoteClassification",
    "EnsembleDecision",
    "ActivitySource",
    "ActivitySuggestion",
    "SessionRecord",
    # Domain Services
    "detect_language",
    "KeywordVoter",
    "SentimentScorer",
    "RemoteClassifierGateway",
    "decide",
    "ActivityResolver",
    "EmotionAnalyzer",
    # API (lazy)
    "get_app",
    "create_app",
]
