"""
AI Adapters
"""

from .huggingface import HuggingFaceClassifier

__all__ = [
    "HuggingFaceClassifier",
]
