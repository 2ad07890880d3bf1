"""
EmotionAnalyzer tests

End-to-end request flow with mocked collaborators:
- scenarios for English, Thai and remote-classified text
- degraded collaborators never surface errors
- fire-and-forget session records
"""

import asyncio

import pytest

from feelink.adapters.quota.memory import InMemoryQuotaStore
from feelink.core.exceptions import ExternalServiceError, StorageError, ValidationError
from feelink.domain.models.activity import ActivitySource
from feelink.domain.models.emotion import AnalysisMethod, EmotionCategory
from feelink.domain.models.session import SessionRecord, hash_user
from feelink.domain.ports.classifier_port import IEmotionClassifier
from feelink.domain.ports.storage_port import IQuotaStore, ISessionStore
from feelink.domain.services.activity import ActivityResolver
from feelink.domain.services.analysis import (
    AnalysisRequest,
    EmotionAnalyzer,
    SessionRecorder,
)
from feelink.domain.services.gateway import RemoteClassifierGateway
from feelink.domain.services.sentiment import SentimentScorer


# === Mocks ===


class FixedScorer(SentimentScorer):
    def __init__(self, value: float = 0.0):
        super().__init__()
        self.value = value

    def score(self, text: str) -> float:
        return self.value


class BrokenScorer(SentimentScorer):
    def score(self, text: str) -> float:
        raise RuntimeError("analyzer crashed")


class MockClassifier(IEmotionClassifier):
    def __init__(self, pairs=None, error: Exception | None = None):
        self._pairs = pairs or []
        self._error = error
        self.calls = 0

    async def classify(self, text: str) -> list[tuple[str, float]]:
        self.calls += 1
        if self._error:
            raise self._error
        return self._pairs

    @property
    def model_name(self) -> str:
        return "mock-model"


class BrokenQuotaStore(IQuotaStore):
    async def increment(self, key: str) -> int:
        raise StorageError("quota store unreachable")

    async def get(self, key: str) -> int:
        raise StorageError("quota store unreachable")


class MockSessionStore(ISessionStore):
    def __init__(self):
        self.records: list[SessionRecord] = []

    async def save_session(self, record: SessionRecord) -> None:
        self.records.append(record)


class BrokenSessionStore(ISessionStore):
    async def save_session(self, record: SessionRecord) -> None:
        raise StorageError("table unavailable")


class SlowSessionStore(ISessionStore):
    def __init__(self):
        self.release = asyncio.Event()
        self.records: list[SessionRecord] = []

    async def save_session(self, record: SessionRecord) -> None:
        await self.release.wait()
        self.records.append(record)


async def _no_sleep(delay: float) -> None:
    return None


def make_analyzer(
    classifier=None,
    quota_store=None,
    session_store=None,
    scorer=None,
    llm_fallback_enabled=False,
) -> EmotionAnalyzer:
    gateway = RemoteClassifierGateway(
        classifier=classifier,
        quota_store=quota_store or InMemoryQuotaStore(),
        sleep=_no_sleep,
    )
    return EmotionAnalyzer(
        gateway=gateway,
        resolver=ActivityResolver(),
        recorder=SessionRecorder(session_store),
        scorer=scorer or FixedScorer(),
        llm_fallback_enabled=llm_fallback_enabled,
    )


# === AnalysisRequest ===


class TestAnalysisRequest:

    def test_text_is_trimmed(self):
        assert AnalysisRequest(text="  hi  ").text == "hi"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_blank_text_rejected(self, text):
        with pytest.raises(ValidationError, match="No text provided") as exc_info:
            AnalysisRequest(text=text)

        assert exc_info.value.details["field"] == "text"


# === Scenarios ===


class TestScenarios:

    @pytest.mark.asyncio
    async def test_english_keywords_without_remote(self):
        """happy=2 -> happy @ 0.70, ensemble-only"""
        analyzer = make_analyzer()

        result = await analyzer.analyze(AnalysisRequest(text="I am so happy and excited today"))

        assert result.decision.emotion == EmotionCategory.HAPPY
        assert result.decision.confidence == pytest.approx(0.70)
        assert result.decision.method == AnalysisMethod.ENSEMBLE_ONLY
        assert result.lang == "en"

    @pytest.mark.asyncio
    async def test_thai_anxious_override(self):
        """Thai text with one anxious keyword -> anxious @ >= 0.65"""
        analyzer = make_analyzer()

        result = await analyzer.analyze(AnalysisRequest(text="ฉันกังวลมาก"))

        assert result.lang == "th"
        assert result.decision.emotion == EmotionCategory.ANXIOUS
        assert result.decision.confidence >= 0.65

    @pytest.mark.asyncio
    async def test_confident_remote_result(self):
        """joy @ 0.85 -> happy @ 0.95 via huggingface"""
        classifier = MockClassifier([("joy", 0.85), ("neutral", 0.1)])
        analyzer = make_analyzer(classifier=classifier)

        result = await analyzer.analyze(AnalysisRequest(text="what a day"))

        assert result.decision.emotion == EmotionCategory.HAPPY
        assert result.decision.confidence == pytest.approx(0.95)
        assert result.decision.method == AnalysisMethod.HUGGINGFACE
        assert result.details["hfLabel"] == "joy"

    @pytest.mark.asyncio
    async def test_quota_store_down_and_remote_failing(self):
        """Remote still attempted; its failure leaves an ensemble-only result"""
        classifier = MockClassifier(error=ExternalServiceError("HTTP 500", service_name="huggingface"))
        analyzer = make_analyzer(classifier=classifier, quota_store=BrokenQuotaStore())

        result = await analyzer.analyze(AnalysisRequest(text="I am so happy and excited today"))

        assert classifier.calls == 1
        assert result.decision.method == AnalysisMethod.ENSEMBLE_ONLY
        assert result.decision.emotion == EmotionCategory.HAPPY

    @pytest.mark.asyncio
    async def test_real_sentiment_scorer(self):
        """Keyword tier decides regardless of the TextBlob polarity"""
        analyzer = make_analyzer(scorer=SentimentScorer())

        result = await analyzer.analyze(AnalysisRequest(text="I am so happy and excited today"))

        assert result.decision.emotion == EmotionCategory.HAPPY
        assert result.decision.confidence == pytest.approx(0.70)


class TestDegradation:

    @pytest.mark.asyncio
    async def test_sentiment_failure_scores_zero(self):
        analyzer = make_analyzer(scorer=BrokenScorer())

        result = await analyzer.analyze(AnalysisRequest(text="nothing much"))

        assert result.decision.emotion == EmotionCategory.NEUTRAL
        assert result.decision.details["sentimentScore"] == 0.0

    @pytest.mark.asyncio
    async def test_session_store_failure_is_swallowed(self):
        analyzer = make_analyzer(session_store=BrokenSessionStore())

        result = await analyzer.analyze(AnalysisRequest(text="so angry"))
        await analyzer.recorder.drain()

        assert result.decision.emotion == EmotionCategory.ANGRY


class TestResponsePayload:

    @pytest.mark.asyncio
    async def test_details_fields(self):
        analyzer = make_analyzer()

        payload = (await analyzer.analyze(AnalysisRequest(text="I feel sad and lonely"))).to_dict()

        assert payload["emotion"] == "sad"
        assert payload["activity"]
        assert payload["encouragement"]
        details = payload["details"]
        assert details["detectedLanguage"] == "en"
        assert details["analysisMethod"] == "ensemble-only"
        assert details["activitiesSource"] == ActivitySource.FALLBACK.value
        assert details["activitiesMatchedCount"] == 0
        assert details["activitiesTable"] == ""
        assert details["source"] == "local-ensemble"
        assert details["keywordVotes"]["sad"] == 2

    @pytest.mark.asyncio
    async def test_llm_toggle_is_reported(self):
        analyzer = make_analyzer(llm_fallback_enabled=True)
        result = await analyzer.analyze(AnalysisRequest(text="ok"))
        assert result.details["source"] == "openai-fallback"


class TestSessionRecording:

    @pytest.mark.asyncio
    async def test_record_written_in_background(self):
        store = MockSessionStore()
        analyzer = make_analyzer(session_store=store)

        result = await analyzer.analyze(AnalysisRequest(text="so worried", user_id="alice"))
        await analyzer.recorder.drain()

        assert len(store.records) == 1
        record = store.records[0]
        assert record.session_id == result.session_id
        assert record.user_hash == hash_user("alice")
        assert record.emotion == "anxious"
        assert record.method == "ensemble-only"
        assert record.lang == "en"
        assert record.text == "so worried"
        assert record.details["detectedLanguage"] == "en"

    @pytest.mark.asyncio
    async def test_response_does_not_wait_for_write(self):
        store = SlowSessionStore()
        analyzer = make_analyzer(session_store=store)

        result = await analyzer.analyze(AnalysisRequest(text="hello"))

        assert result.decision is not None
        assert store.records == []

        store.release.set()
        await analyzer.recorder.drain()
        assert len(store.records) == 1

    @pytest.mark.asyncio
    async def test_no_store_no_task(self):
        recorder = SessionRecorder(None)
        record = SessionRecord(
            user_hash="x", text="t", emotion="neutral", confidence=0.5,
            method="ensemble-only", lang="en",
        )
        assert recorder.record(record) is None
