"""
Ports
Interfaces to external collaborators
"""

from .classifier_port import IEmotionClassifier
from .storage_port import IActivityStore, IQuotaStore, ISessionStore

__all__ = [
    "IEmotionClassifier",
    "IQuotaStore",
    "IActivityStore",
    "ISessionStore",
]
