"""
Adapters Layer
Concrete implementations of the domain ports

Import adapters directly to keep optional dependencies lazy:
    from feelink.adapters.ai.huggingface import HuggingFaceClassifier
    from feelink.adapters.quota.redis_store import RedisQuotaStore
"""

__all__ = [
    "ai",
    "quota",
    "storage",
]
