"""
Remote classifier gateway
Quota-gated access to the hosted emotion model with a single cold-start retry
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ...core.exceptions import ModelLoadingError
from ...core.logging import get_logger, log_business_event, log_degradation
from ..models.emotion import RemoteClassification

if TYPE_CHECKING:
    from ..ports.classifier_port import IEmotionClassifier
    from ..ports.storage_port import IQuotaStore

logger = get_logger(__name__)

DEFAULT_MONTHLY_LIMIT = 500
DEFAULT_RETRY_COOLDOWN = 20.0


def month_key(prefix: str, now: datetime) -> str:
    """Counter key for a calendar month, e.g. feelink:hf_quota:2026-10"""
    return f"{prefix}:{now.strftime('%Y-%m')}"


class RemoteClassifierGateway:
    """
    Remote classifier gateway

    Order of operations per call:
    1. no classifier configured -> None, quota untouched
    2. increment the month counter (store failure admits the call)
    3. counter above the limit -> None
    4. classify; on a cold-start signal wait the cooldown and retry once
    Every failure ends in None; nothing is raised to the caller.
    """

    def __init__(
        self,
        classifier: IEmotionClassifier | None,
        quota_store: IQuotaStore,
        monthly_limit: int = DEFAULT_MONTHLY_LIMIT,
        retry_cooldown: float = DEFAULT_RETRY_COOLDOWN,
        key_prefix: str = "feelink:hf_quota",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] | None = None,
    ):
        self._classifier = classifier
        self._quota_store = quota_store
        self._monthly_limit = monthly_limit
        self._retry_cooldown = retry_cooldown
        self._key_prefix = key_prefix
        self._sleep = sleep
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def enabled(self) -> bool:
        return self._classifier is not None

    def current_key(self) -> str:
        return month_key(self._key_prefix, self._clock())

    async def classify(self, text: str) -> RemoteClassification | None:
        """
        Classify text with the hosted model

        Args:
            text: input text

        Returns:
            RemoteClassification | None: ranked result, or None when disabled,
            over quota, or failed
        """
        if self._classifier is None:
            return None

        if not await self._admit():
            return None

        return await self._call_with_cold_start_retry(text)

    async def _admit(self) -> bool:
        """Consume one unit of this month's quota"""
        key = self.current_key()
        try:
            used = await self._quota_store.increment(key)
        except Exception as e:
            # Fail open: a broken counter must not block the user flow
            log_degradation(logger, "quota_store", e, quota_key=key)
            return True

        if used > self._monthly_limit:
            log_business_event(
                logger, "hf_quota_exhausted",
                quota_key=key, used=used, limit=self._monthly_limit,
            )
            return False
        return True

    async def _call_with_cold_start_retry(self, text: str) -> RemoteClassification | None:
        try:
            return await self._attempt(text)
        except ModelLoadingError as e:
            logger.info(
                f"Remote model loading, retrying once in {self._retry_cooldown}s",
                extra={"estimated_time": e.estimated_time},
            )
        except Exception as e:
            log_degradation(logger, "remote_classifier", e)
            return None

        await self._sleep(self._retry_cooldown)
        try:
            return await self._attempt(text)
        except Exception as e:
            log_degradation(logger, "remote_classifier", e, attempt=2)
            return None

    async def _attempt(self, text: str) -> RemoteClassification | None:
        pairs = await self._classifier.classify(text)
        if not pairs:
            logger.warning("Remote classifier returned no labels")
            return None
        return RemoteClassification(
            ranked=tuple((str(label), float(score)) for label, score in pairs)
        )
