"""
API Dependencies
Dependency injection wiring
"""

from pathlib import Path
from typing import Optional

from ..adapters.ai.huggingface import HuggingFaceClassifier
from ..adapters.quota.memory import InMemoryQuotaStore
from ..adapters.storage.activity_file import FileActivityStore
from ..adapters.storage.session_file import FileSessionStore
from ..core.config import get_settings
from ..core.logging import get_logger
from ..domain.ports.classifier_port import IEmotionClassifier
from ..domain.ports.storage_port import IActivityStore, IQuotaStore, ISessionStore
from ..domain.services.activity import ActivityResolver
from ..domain.services.analysis import EmotionAnalyzer, SessionRecorder
from ..domain.services.gateway import RemoteClassifierGateway

logger = get_logger("api.dependencies")


# === Singletons ===

_classifier: Optional[IEmotionClassifier] = None
_classifier_resolved = False
_quota_store: Optional[IQuotaStore] = None
_activity_store: Optional[IActivityStore] = None
_activity_store_resolved = False
_session_store: Optional[ISessionStore] = None
_gateway: Optional[RemoteClassifierGateway] = None
_analyzer: Optional[EmotionAnalyzer] = None


# === Providers ===


def get_classifier() -> Optional[IEmotionClassifier]:
    """Remote classifier, or None when disabled or missing a token"""
    global _classifier, _classifier_resolved
    if not _classifier_resolved:
        hf = get_settings().huggingface
        if hf.is_configured:
            _classifier = HuggingFaceClassifier(
                api_token=hf.api_token,
                model=hf.model,
                timeout=hf.timeout,
                base_url=hf.base_url,
            )
        _classifier_resolved = True
    return _classifier


def get_quota_store() -> IQuotaStore:
    """Quota store

    QUOTA_REDIS_URL selects Redis; otherwise counters stay in-process.
    """
    global _quota_store
    if _quota_store is None:
        quota = get_settings().quota
        if quota.redis_url:
            from ..adapters.quota.redis_store import RedisQuotaStore

            _quota_store = RedisQuotaStore.from_url(quota.redis_url)
        else:
            _quota_store = InMemoryQuotaStore()
    return _quota_store


def get_activity_store() -> Optional[IActivityStore]:
    """Activity store, or None when ACTIVITIES_TABLE is unset"""
    global _activity_store, _activity_store_resolved
    if not _activity_store_resolved:
        table = get_settings().storage.activities_table
        if table:
            path = Path(table)
            if path.suffix != ".json":
                path = Path(get_settings().data_dir) / f"{table}.json"
            _activity_store = FileActivityStore(str(path))
        _activity_store_resolved = True
    return _activity_store


def get_session_store() -> ISessionStore:
    """Session store"""
    global _session_store
    if _session_store is None:
        settings = get_settings()
        _session_store = FileSessionStore(
            data_dir=settings.data_dir,
            table_name=settings.storage.sessions_table,
        )
    return _session_store


def get_gateway() -> RemoteClassifierGateway:
    """Remote classifier gateway"""
    global _gateway
    if _gateway is None:
        settings = get_settings()
        _gateway = RemoteClassifierGateway(
            classifier=get_classifier(),
            quota_store=get_quota_store(),
            monthly_limit=settings.huggingface.monthly_limit,
            retry_cooldown=settings.huggingface.retry_cooldown,
            key_prefix=settings.quota.key_prefix,
        )
    return _gateway


def get_analyzer() -> EmotionAnalyzer:
    """Emotion analysis service"""
    global _analyzer
    if _analyzer is None:
        _analyzer = EmotionAnalyzer(
            gateway=get_gateway(),
            resolver=ActivityResolver(store=get_activity_store()),
            recorder=SessionRecorder(get_session_store()),
            llm_fallback_enabled=get_settings().enable_openai,
        )
    return _analyzer


async def shutdown_dependencies() -> None:
    """Drain pending session writes and close the quota store

    Only touches singletons that were actually built; nothing is created here.
    """
    if _analyzer is not None:
        await _analyzer.recorder.drain()

    close = getattr(_quota_store, "close", None)
    if close is not None:
        await close()


# === Test helpers ===


def reset_dependencies() -> None:
    """Reset every singleton (tests)"""
    global _classifier, _classifier_resolved, _quota_store, _activity_store
    global _activity_store_resolved, _session_store, _gateway, _analyzer
    _classifier = None
    _classifier_resolved = False
    _quota_store = None
    _activity_store = None
    _activity_store_resolved = False
    _session_store = None
    _gateway = None
    _analyzer = None


def set_analyzer(analyzer: EmotionAnalyzer) -> None:
    """Override the analysis service (tests)"""
    global _analyzer
    _analyzer = analyzer


def set_quota_store(store: IQuotaStore) -> None:
    """Override the quota store (tests)"""
    global _quota_store
    _quota_store = store
