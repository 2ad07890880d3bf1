"""
Activity resolver
Picks a coping activity for an emotion from the store or the fallback bank
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from ...core.logging import get_logger, log_degradation
from ..models.activity import ActivitySource, ActivitySuggestion, fallback_for
from ..models.emotion import EmotionCategory

if TYPE_CHECKING:
    from ..ports.storage_port import IActivityStore

logger = get_logger(__name__)

STORE_QUERY_LIMIT = 10


class ActivityResolver:
    """
    Activity resolver

    Without a store every emotion gets its fallback entry. With a store,
    one matching row is picked uniformly at random; the random source is
    injectable so tests can seed it.
    """

    def __init__(
        self,
        store: IActivityStore | None = None,
        rng: random.Random | None = None,
        query_limit: int = STORE_QUERY_LIMIT,
    ):
        self._store = store
        self._rng = rng or random.Random()
        self._query_limit = query_limit

    @property
    def table_name(self) -> str:
        return self._store.table_name if self._store is not None else ""

    async def resolve(self, emotion: EmotionCategory | str) -> ActivitySuggestion:
        """
        Suggest an activity

        Args:
            emotion: emotion category or label

        Returns:
            ActivitySuggestion: the suggestion and where it came from
        """
        label = emotion.value if isinstance(emotion, EmotionCategory) else str(emotion)
        fallback = fallback_for(label)

        if self._store is None:
            return self._from_fallback(label, ActivitySource.FALLBACK)

        try:
            rows = await self._store.find_by_emotion(label, limit=self._query_limit)
        except Exception as e:
            log_degradation(logger, "activity_store", e, emotion=label)
            return self._from_fallback(label, ActivitySource.FALLBACK_ERROR)

        if not rows:
            return self._from_fallback(label, ActivitySource.FALLBACK)

        pick = self._rng.choice(rows)
        return ActivitySuggestion(
            activity=pick.get("activity") or fallback.activity,
            # older rows spell the field "encourage"
            encouragement=pick.get("encouragement") or pick.get("encourage") or fallback.encouragement,
            source=ActivitySource.STORE,
            matched_count=len(rows),
        )

    @staticmethod
    def _from_fallback(label: str, source: ActivitySource) -> ActivitySuggestion:
        entry = fallback_for(label)
        return ActivitySuggestion(
            activity=entry.activity,
            encouragement=entry.encouragement,
            source=source,
            matched_count=0,
        )
