"""
In-process quota store
Counters held in memory; used when no Redis URL is configured
"""

import asyncio
from collections import defaultdict

from ...domain.ports.storage_port import IQuotaStore


class InMemoryQuotaStore(IQuotaStore):
    """Per-process counters guarded by an asyncio.Lock"""

    def __init__(self):
        self._counters: dict[str, int] = defaultdict(int)
        self._lock = asyncio.Lock()

    async def increment(self, key: str) -> int:
        async with self._lock:
            self._counters[key] += 1
            return self._counters[key]

    async def get(self, key: str) -> int:
        return self._counters.get(key, 0)
