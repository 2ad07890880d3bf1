"""
File activity store
Activity rows read from a JSON file
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from ...core.exceptions import StorageError
from ...domain.ports.storage_port import IActivityStore


class FileActivityStore(IActivityStore):
    """
    File activity store

    The file holds a list of {"emotion", "activity", "encouragement"}
    rows, or {"activities": [...]}. It is re-read on every query so edits
    apply without a restart.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    @property
    def table_name(self) -> str:
        return self.path.stem

    async def find_by_emotion(self, emotion: str, limit: int = 10) -> list[dict[str, Any]]:
        loop = asyncio.get_running_loop()
        try:
            rows = await loop.run_in_executor(None, self._read_rows)
        except (OSError, ValueError) as e:
            raise StorageError(
                f"Activity store unreadable: {e}", details={"path": str(self.path)}
            ) from e

        matches = [row for row in rows if row.get("emotion") == emotion]
        return matches[:limit]

    def _read_rows(self) -> list[dict[str, Any]]:
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("activities", [])
        if not isinstance(data, list):
            raise ValueError("activities file must hold a list of rows")
        return [row for row in data if isinstance(row, dict)]
