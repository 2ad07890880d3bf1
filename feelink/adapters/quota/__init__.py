"""
Quota Adapters

Example:
    from feelink.adapters.quota.redis_store import RedisQuotaStore
    from feelink.adapters.quota.memory import InMemoryQuotaStore
"""

from .memory import InMemoryQuotaStore

__all__ = [
    "InMemoryQuotaStore",
]
