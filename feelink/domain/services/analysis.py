"""
Emotion analysis service
Runs one request through detection, classification, decision and activity lookup
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ...core.exceptions import ValidationError
from ...core.logging import get_logger, log_business_event, log_degradation
from ..models.activity import ActivitySuggestion
from ..models.emotion import EnsembleDecision
from ..models.session import SessionRecord, hash_user
from .activity import ActivityResolver
from .ensemble import decide
from .gateway import RemoteClassifierGateway
from .language import detect_language
from .lexicon import KeywordVoter
from .sentiment import SentimentScorer

if TYPE_CHECKING:
    from ..ports.storage_port import ISessionStore

logger = get_logger(__name__)


@dataclass
class AnalysisRequest:
    """Inbound analysis request"""

    text: str
    user_id: str | None = None
    client_ip: str | None = None

    def __post_init__(self):
        self.text = (self.text or "").strip()
        if not self.text:
            raise ValidationError("No text provided", field="text")


@dataclass
class AnalysisResult:
    """Decision plus suggestion for one request"""

    decision: EnsembleDecision
    suggestion: ActivitySuggestion
    lang: str
    activities_table: str = ""
    llm_fallback_enabled: bool = False
    session_id: str | None = None

    @property
    def details(self) -> dict[str, Any]:
        """Outbound details payload"""
        return {
            **self.decision.details,
            "detectedLanguage": self.lang,
            "analysisMethod": self.decision.method.value,
            "source": "openai-fallback" if self.llm_fallback_enabled else "local-ensemble",
            "activitiesSource": self.suggestion.source.value,
            "activitiesMatchedCount": self.suggestion.matched_count,
            "activitiesTable": self.activities_table,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "emotion": self.decision.emotion.value,
            "confidence": self.decision.confidence,
            "activity": self.suggestion.activity,
            "encouragement": self.suggestion.encouragement,
            "details": self.details,
        }


class SessionRecorder:
    """
    Fire-and-forget session persistence

    record() schedules the write and returns immediately. Store errors
    are logged and dropped.
    """

    def __init__(self, store: ISessionStore | None):
        self._store = store
        self._pending: set[asyncio.Task] = set()

    def record(self, record: SessionRecord) -> asyncio.Task | None:
        if self._store is None:
            return None
        task = asyncio.create_task(self._write(record))
        # Event loop keeps only weak references to tasks
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _write(self, record: SessionRecord) -> None:
        try:
            await self._store.save_session(record)
        except Exception as e:
            log_degradation(logger, "session_store", e, session_id=record.session_id)

    async def drain(self) -> None:
        """Wait for pending writes (shutdown and tests)"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class EmotionAnalyzer:
    """
    Emotion analysis service

    Sequence per request:
    detect language -> remote classifier (quota-gated) -> keyword votes
    -> sentiment -> ensemble decision -> activity -> session record
    """

    def __init__(
        self,
        gateway: RemoteClassifierGateway,
        resolver: ActivityResolver,
        recorder: SessionRecorder | None = None,
        voter: KeywordVoter | None = None,
        scorer: SentimentScorer | None = None,
        llm_fallback_enabled: bool = False,
    ):
        self._gateway = gateway
        self._resolver = resolver
        self._recorder = recorder or SessionRecorder(None)
        self._voter = voter or KeywordVoter()
        self._scorer = scorer or SentimentScorer()
        self._llm_fallback_enabled = llm_fallback_enabled

    @property
    def recorder(self) -> SessionRecorder:
        return self._recorder

    def score_sentiment(self, text: str) -> float:
        """Sentiment score, 0.0 if the analyzer fails"""
        try:
            return self._scorer.score(text)
        except Exception as e:
            log_degradation(logger, "sentiment", e)
            return 0.0

    async def decide(self, text: str, lang: str | None = None) -> EnsembleDecision:
        """Emotion decision for a text without activity lookup or persistence"""
        lang = lang or detect_language(text)
        remote = await self._gateway.classify(text)
        votes = self._voter.vote(text, lang)
        sentiment_score = self.score_sentiment(text)
        return decide(votes, sentiment_score, remote)

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Analyse a request end to end

        Args:
            request: validated request

        Returns:
            AnalysisResult: decision, suggestion and details
        """
        lang = detect_language(request.text)
        decision = await self.decide(request.text, lang)
        suggestion = await self._resolver.resolve(decision.emotion)

        result = AnalysisResult(
            decision=decision,
            suggestion=suggestion,
            lang=lang,
            activities_table=self._resolver.table_name,
            llm_fallback_enabled=self._llm_fallback_enabled,
        )

        user_hash = hash_user(request.user_id, request.client_ip)
        record = SessionRecord.from_decision(
            decision,
            text=request.text,
            lang=lang,
            user_hash=user_hash,
            details=result.details,
        )
        result.session_id = record.session_id
        self._recorder.record(record)

        log_business_event(
            logger, "emotion_analyzed", user_hash=user_hash,
            emotion=decision.emotion.value,
            confidence=decision.confidence,
            method=decision.method.value,
            lang=lang,
        )
        return result
