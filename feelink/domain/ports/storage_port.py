"""
Storage ports
Quota counter, activity store and session store interfaces
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models.session import SessionRecord


class IQuotaStore(ABC):
    """
    Monthly quota counter

    increment() must be atomic at the storage layer: concurrent callers
    each observe a distinct post-increment value.
    """

    @abstractmethod
    async def increment(self, key: str) -> int:
        """
        Atomically increment a counter and read it back

        Args:
            key: counter key (one per calendar month)

        Returns:
            int: post-increment value
        """

    @abstractmethod
    async def get(self, key: str) -> int:
        """Current counter value (0 if the key was never written)"""

    async def health_check(self) -> bool:
        try:
            await self.get("health")
            return True
        except Exception:
            return False


class IActivityStore(ABC):
    """Activity rows queryable by emotion label"""

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Name reported back to clients"""

    @abstractmethod
    async def find_by_emotion(self, emotion: str, limit: int = 10) -> list[dict[str, Any]]:
        """
        Rows for an emotion

        Args:
            emotion: emotion label
            limit: maximum number of rows

        Returns:
            list[dict]: rows holding "activity" and "encouragement"
        """


class ISessionStore(ABC):
    """Write-only sink for analysed sessions"""

    @abstractmethod
    async def save_session(self, record: SessionRecord) -> None:
        """
        Persist a session record

        Args:
            record: record to store
        """

    async def health_check(self) -> bool:
        return True
