"""
Activity models
Suggested coping activities and the static fallback bank
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from .emotion import EmotionCategory


class ActivitySource(Enum):
    """Where a suggestion came from"""

    STORE = "store"  # picked from activity store rows
    FALLBACK = "fallback"  # no store configured, or it returned no rows
    FALLBACK_ERROR = "fallback-error"  # store query failed


@dataclass(frozen=True)
class ActivitySuggestion:
    """Suggested activity with a line of encouragement"""

    activity: str
    encouragement: str
    source: ActivitySource
    matched_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "activity": self.activity,
            "encouragement": self.encouragement,
            "source": self.source.value,
            "matched_count": self.matched_count,
        }


@dataclass(frozen=True)
class FallbackActivity:
    activity: str
    encouragement: str


FALLBACK_BANK: Mapping[EmotionCategory, FallbackActivity] = MappingProxyType({
    EmotionCategory.HAPPY: FallbackActivity(
        activity="Share a happy moment with a friend or write it down.",
        encouragement="Keep shining ✨",
    ),
    EmotionCategory.SAD: FallbackActivity(
        activity="Try a short walk or listen to a comforting song.",
        encouragement="This too shall pass. You're not alone.",
    ),
    EmotionCategory.ANXIOUS: FallbackActivity(
        activity="Try 3 deep breaths and a 2-minute grounding exercise.",
        encouragement="Breathe. You've got this.",
    ),
    EmotionCategory.ANGRY: FallbackActivity(
        activity="Step away for 5 minutes and breathe deeply.",
        encouragement="It's okay to feel this. Take a pause.",
    ),
    EmotionCategory.NEUTRAL: FallbackActivity(
        activity="Write down one small win today.",
        encouragement="Small steps add up.",
    ),
})


def fallback_for(emotion: EmotionCategory | str) -> FallbackActivity:
    """Fallback entry for an emotion; unrecognised emotions get the neutral entry"""
    if isinstance(emotion, str):
        try:
            emotion = EmotionCategory(emotion)
        except ValueError:
            return FALLBACK_BANK[EmotionCategory.NEUTRAL]
    return FALLBACK_BANK.get(emotion, FALLBACK_BANK[EmotionCategory.NEUTRAL])
