"""
Keyword voting
Counts distinct per-locale emotion keywords found in a text
"""

from types import MappingProxyType
from typing import Mapping

from ..models.emotion import EmotionCategory, KeywordVoteTally
from .language import DEFAULT_LOCALE

KeywordTable = Mapping[EmotionCategory, tuple[str, ...]]


KEYWORDS: Mapping[str, KeywordTable] = MappingProxyType({
    "en": MappingProxyType({
        EmotionCategory.HAPPY: ("happy", "joy", "glad", "excited", "great", "pleased"),
        EmotionCategory.SAD: ("sad", "lonely", "depressed", "unhappy", "miserable", "down"),
        EmotionCategory.ANXIOUS: ("anxiety", "anxious", "worried", "nervous", "stressed", "panic"),
        # "frustrat" catches frustrated/frustrating/frustration
        EmotionCategory.ANGRY: ("angry", "mad", "furious", "annoyed", "irate", "frustrat"),
    }),
    "th": MappingProxyType({
        EmotionCategory.HAPPY: ("มีความสุข", "ดีใจ", "สุข", "ยินดี", "สนุก"),
        EmotionCategory.SAD: ("เศร้า", "เสียใจ", "หดหู่", "เหงา"),
        EmotionCategory.ANXIOUS: ("กังวล", "เครียด", "หวั่น", "ห่วง"),
        EmotionCategory.ANGRY: ("โกรธ", "หงุดหงิด", "โมโห"),
    }),
})


class KeywordVoter:
    """
    Lexical voter

    Each keyword counts at most once per text, however often it occurs.
    Matching is case-insensitive substring search.
    """

    def __init__(self, keywords: Mapping[str, KeywordTable] | None = None,
                 default_locale: str = DEFAULT_LOCALE):
        self._keywords = keywords if keywords is not None else KEYWORDS
        self._default_locale = default_locale
        # Lower-cased once so vote() stays a plain scan
        self._lowered: dict[str, dict[EmotionCategory, tuple[str, ...]]] = {
            locale: {emotion: tuple(kw.lower() for kw in words) for emotion, words in table.items()}
            for locale, table in self._keywords.items()
        }

    def vote(self, text: str, locale: str) -> KeywordVoteTally:
        """
        Tally keyword hits

        Args:
            text: input text
            locale: locale tag; unknown locales use the default table

        Returns:
            KeywordVoteTally: distinct keyword hits per emotion
        """
        lower = text.lower()
        table = self._lowered.get(locale) or self._lowered[self._default_locale]
        counts = {
            emotion: sum(1 for kw in words if kw in lower)
            for emotion, words in table.items()
        }
        return KeywordVoteTally(counts)
