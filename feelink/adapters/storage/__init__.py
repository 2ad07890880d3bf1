"""
Storage Adapters

Example:
    from feelink.adapters.storage.session_file import FileSessionStore
    from feelink.adapters.storage.activity_file import FileActivityStore
"""

from .activity_file import FileActivityStore
from .session_file import FileSessionStore

__all__ = [
    "FileActivityStore",
    "FileSessionStore",
]
