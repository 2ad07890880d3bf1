"""
Domain Services
"""

from .activity import ActivityResolver
from .analysis import AnalysisRequest, AnalysisResult, EmotionAnalyzer, SessionRecorder
from .ensemble import decide
from .gateway import RemoteClassifierGateway
from .language import detect_language
from .lexicon import KeywordVoter
from .sentiment import SentimentScorer

__all__ = [
    "detect_language",
    "KeywordVoter",
    "SentimentScorer",
    "RemoteClassifierGateway",
    "decide",
    "ActivityResolver",
    "EmotionAnalyzer",
    "AnalysisRequest",
    "AnalysisResult",
    "SessionRecorder",
]
