"""
File session store
Session records appended to a JSON file (atomic replace)
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path

from ...core.exceptions import StorageError
from ...core.logging import get_logger
from ...domain.models.session import SessionRecord
from ...domain.ports.storage_port import ISessionStore

logger = get_logger(__name__)


class FileSessionStore(ISessionStore):
    """
    File session store

    One JSON document per table holding every record. Writes go to a
    temp file that replaces the original, under an asyncio.Lock.
    """

    def __init__(self, data_dir: str = "data", table_name: str = "FeelinkSessions"):
        self.data_dir = Path(data_dir)
        self.table_name = table_name
        self.data_file = self.data_dir / f"{table_name}.json"
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = asyncio.Lock()

    async def save_session(self, record: SessionRecord) -> None:
        """Append a record"""
        async with self._lock:
            loop = asyncio.get_running_loop()
            try:
                await loop.run_in_executor(None, self._append_record, record.to_dict())
            except (OSError, ValueError) as e:
                raise StorageError(
                    f"Session write failed: {e}",
                    details={"table": self.table_name, "session_id": record.session_id},
                ) from e

    async def list_sessions(self) -> list[SessionRecord]:
        """Every stored record (oldest first)"""
        async with self._lock:
            loop = asyncio.get_running_loop()
            data = await loop.run_in_executor(None, self._read_json_file)
        return [SessionRecord.from_dict(item) for item in data.get("sessions", [])]

    async def health_check(self) -> bool:
        return self.data_dir.is_dir()

    def _append_record(self, item: dict) -> None:
        data = self._read_json_file()
        data.setdefault("sessions", []).append(item)
        data["updated_at"] = datetime.now().isoformat()
        temp_file = self.data_file.with_suffix(".tmp")
        self._write_json_file(temp_file, data)
        temp_file.replace(self.data_file)

    def _read_json_file(self) -> dict:
        if not self.data_file.exists():
            return {"sessions": []}
        try:
            with open(self.data_file, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Session file unreadable, starting a new one: {e}")
            return {"sessions": []}

    def _write_json_file(self, path: Path, data: dict) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, separators=(",", ":"))
