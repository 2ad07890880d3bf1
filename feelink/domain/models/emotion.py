"""
Emotion models
Categories, keyword tallies, remote classifications and ensemble decisions
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class EmotionCategory(Enum):
    """
    Emotion category
    Closed set: the engine never produces anything else
    """

    HAPPY = "happy"
    SAD = "sad"
    ANXIOUS = "anxious"
    ANGRY = "angry"
    NEUTRAL = "neutral"


class AnalysisMethod(Enum):
    """Which tier produced the decision"""

    HUGGINGFACE = "huggingface"
    ENSEMBLE_WITH_HF = "ensemble-with-hf"
    ENSEMBLE_ONLY = "ensemble-only"


# Vote order doubles as the tie-break order when ranking tallies
VOTING_CATEGORIES: tuple[EmotionCategory, ...] = (
    EmotionCategory.HAPPY,
    EmotionCategory.SAD,
    EmotionCategory.ANXIOUS,
    EmotionCategory.ANGRY,
)

MIN_CONFIDENCE = 0.45
MAX_CONFIDENCE = 0.98


class KeywordVoteTally:
    """
    Keyword hit counts per emotion

    Immutable once built. NEUTRAL never receives votes and reads as zero.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[EmotionCategory, int] | None = None):
        counts = counts or {}
        for emotion, count in counts.items():
            if emotion not in VOTING_CATEGORIES:
                raise ValueError(f"{emotion} cannot receive keyword votes")
            if count < 0:
                raise ValueError("vote counts must be non-negative")
        self._counts = MappingProxyType(
            {emotion: int(counts.get(emotion, 0)) for emotion in VOTING_CATEGORIES}
        )

    def __getitem__(self, emotion: EmotionCategory) -> int:
        return self._counts.get(emotion, 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeywordVoteTally):
            return NotImplemented
        return dict(self._counts) == dict(other._counts)

    def __hash__(self) -> int:
        return hash(tuple(self._counts.items()))

    def __repr__(self) -> str:
        return f"KeywordVoteTally({self.to_dict()})"

    def ranked(self) -> list[tuple[EmotionCategory, int]]:
        """Categories by count descending; ties keep VOTING_CATEGORIES order"""
        return sorted(self._counts.items(), key=lambda item: -item[1])

    def to_dict(self) -> dict[str, int]:
        return {emotion.value: count for emotion, count in self._counts.items()}


@dataclass(frozen=True)
class RemoteClassification:
    """Ranked output of the hosted emotion model"""

    ranked: tuple[tuple[str, float], ...]

    def __post_init__(self):
        if not self.ranked:
            raise ValueError("a remote classification needs at least one label")
        ordered = tuple(sorted(self.ranked, key=lambda pair: pair[1], reverse=True))
        object.__setattr__(self, "ranked", ordered)

    @property
    def top_label(self) -> str:
        return self.ranked[0][0]

    @property
    def confidence(self) -> float:
        return min(max(float(self.ranked[0][1]), 0.0), 1.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hfLabel": self.top_label,
            "hfScore": self.confidence,
            "hfRanked": [{"label": label, "score": score} for label, score in self.ranked],
        }


@dataclass(frozen=True)
class EnsembleDecision:
    """Final emotion decision"""

    emotion: EmotionCategory
    confidence: float
    method: AnalysisMethod
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not MIN_CONFIDENCE <= self.confidence <= MAX_CONFIDENCE:
            raise ValueError(f"confidence {self.confidence} outside [{MIN_CONFIDENCE}, {MAX_CONFIDENCE}]")

    def to_dict(self) -> dict[str, Any]:
        return {
            "emotion": self.emotion.value,
            "confidence": self.confidence,
            "method": self.method.value,
            "details": self.details,
        }


# Many-to-one map from hosted model labels; anything else reads as NEUTRAL
REMOTE_LABEL_MAP: Mapping[str, EmotionCategory] = MappingProxyType({
    "joy": EmotionCategory.HAPPY,
    "love": EmotionCategory.HAPPY,
    "optimism": EmotionCategory.HAPPY,
    "amusement": EmotionCategory.HAPPY,
    "excitement": EmotionCategory.HAPPY,
    "gratitude": EmotionCategory.HAPPY,
    "admiration": EmotionCategory.HAPPY,
    "approval": EmotionCategory.HAPPY,
    "pride": EmotionCategory.HAPPY,
    "relief": EmotionCategory.HAPPY,
    "caring": EmotionCategory.HAPPY,
    "desire": EmotionCategory.HAPPY,
    "sadness": EmotionCategory.SAD,
    "grief": EmotionCategory.SAD,
    "disappointment": EmotionCategory.SAD,
    "remorse": EmotionCategory.SAD,
    "embarrassment": EmotionCategory.SAD,
    "fear": EmotionCategory.ANXIOUS,
    "nervousness": EmotionCategory.ANXIOUS,
    "anxiety": EmotionCategory.ANXIOUS,
    "worry": EmotionCategory.ANXIOUS,
    "anger": EmotionCategory.ANGRY,
    "annoyance": EmotionCategory.ANGRY,
    "disgust": EmotionCategory.ANGRY,
    "disapproval": EmotionCategory.ANGRY,
    "neutral": EmotionCategory.NEUTRAL,
    "surprise": EmotionCategory.NEUTRAL,
    "realization": EmotionCategory.NEUTRAL,
    "confusion": EmotionCategory.NEUTRAL,
    "curiosity": EmotionCategory.NEUTRAL,
})


def map_remote_label(label: str) -> EmotionCategory:
    """Map a hosted model label to a category"""
    return REMOTE_LABEL_MAP.get(label.strip().lower(), EmotionCategory.NEUTRAL)
