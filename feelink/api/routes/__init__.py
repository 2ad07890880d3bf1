"""
API Routes
"""

from .analysis import router as analysis_router
from .quota import router as quota_router

__all__ = [
    "analysis_router",
    "quota_router",
]
