"""
ActivityResolver tests
"""

import random
from typing import Any

import pytest

from feelink.core.exceptions import StorageError
from feelink.domain.models.activity import FALLBACK_BANK, ActivitySource, fallback_for
from feelink.domain.models.emotion import EmotionCategory
from feelink.domain.ports.storage_port import IActivityStore
from feelink.domain.services.activity import ActivityResolver


class MockActivityStore(IActivityStore):
    """In-memory activity rows"""

    def __init__(self, rows: list[dict[str, Any]] | None = None, error: Exception | None = None):
        self._rows = rows or []
        self._error = error
        self.queries: list[tuple[str, int]] = []

    @property
    def table_name(self) -> str:
        return "MockActivities"

    async def find_by_emotion(self, emotion: str, limit: int = 10) -> list[dict[str, Any]]:
        self.queries.append((emotion, limit))
        if self._error:
            raise self._error
        return [row for row in self._rows if row["emotion"] == emotion][:limit]


SAD_ROWS = [
    {"emotion": "sad", "activity": f"Activity {i}", "encouragement": f"Encouragement {i}"}
    for i in range(5)
]


class TestWithoutStore:
    """No store configured"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("emotion", list(EmotionCategory))
    async def test_every_category_has_a_fallback(self, emotion):
        suggestion = await ActivityResolver().resolve(emotion)

        assert suggestion.activity == FALLBACK_BANK[emotion].activity
        assert suggestion.encouragement == FALLBACK_BANK[emotion].encouragement
        assert suggestion.source == ActivitySource.FALLBACK
        assert suggestion.matched_count == 0

    @pytest.mark.asyncio
    async def test_unknown_emotion_gets_neutral_entry(self):
        suggestion = await ActivityResolver().resolve("bored")
        assert suggestion.activity == FALLBACK_BANK[EmotionCategory.NEUTRAL].activity

    def test_table_name_empty(self):
        assert ActivityResolver().table_name == ""


class TestWithStore:
    """Store configured"""

    @pytest.mark.asyncio
    async def test_picks_a_matching_row(self):
        store = MockActivityStore(SAD_ROWS)
        suggestion = await ActivityResolver(store, rng=random.Random(7)).resolve(EmotionCategory.SAD)

        assert suggestion.source == ActivitySource.STORE
        assert suggestion.matched_count == 5
        assert suggestion.activity in {row["activity"] for row in SAD_ROWS}
        assert store.queries == [("sad", 10)]

    @pytest.mark.asyncio
    async def test_seeded_choice_is_reproducible(self):
        store = MockActivityStore(SAD_ROWS)
        expected = random.Random(42).choice(SAD_ROWS)

        suggestion = await ActivityResolver(store, rng=random.Random(42)).resolve("sad")

        assert suggestion.activity == expected["activity"]
        assert suggestion.encouragement == expected["encouragement"]

    @pytest.mark.asyncio
    async def test_no_rows_falls_back(self):
        store = MockActivityStore(SAD_ROWS)
        suggestion = await ActivityResolver(store).resolve(EmotionCategory.ANGRY)

        assert suggestion.source == ActivitySource.FALLBACK
        assert suggestion.activity == FALLBACK_BANK[EmotionCategory.ANGRY].activity

    @pytest.mark.asyncio
    async def test_store_error_is_tagged(self):
        store = MockActivityStore(error=StorageError("table missing"))
        suggestion = await ActivityResolver(store).resolve(EmotionCategory.HAPPY)

        assert suggestion.source == ActivitySource.FALLBACK_ERROR
        assert suggestion.activity == FALLBACK_BANK[EmotionCategory.HAPPY].activity

    @pytest.mark.asyncio
    async def test_missing_fields_come_from_fallback(self):
        store = MockActivityStore([{"emotion": "anxious", "activity": "Box breathing"}])
        suggestion = await ActivityResolver(store).resolve(EmotionCategory.ANXIOUS)

        assert suggestion.activity == "Box breathing"
        assert suggestion.encouragement == fallback_for(EmotionCategory.ANXIOUS).encouragement

    @pytest.mark.asyncio
    async def test_legacy_encourage_field(self):
        store = MockActivityStore([{"emotion": "happy", "activity": "Dance", "encourage": "Yes!"}])
        suggestion = await ActivityResolver(store).resolve(EmotionCategory.HAPPY)
        assert suggestion.encouragement == "Yes!"

    def test_table_name_from_store(self):
        assert ActivityResolver(MockActivityStore()).table_name == "MockActivities"
