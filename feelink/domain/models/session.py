"""
Session record model
One record per analysed request, handed to the session store
"""

import hashlib
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .emotion import EnsembleDecision


def hash_user(user_id: str | None, client_ip: str | None = None) -> str:
    """Pseudonymous user key: first 16 hex chars of SHA-256"""
    raw_user = user_id or client_ip or "anon"
    return hashlib.sha256(raw_user.encode("utf-8")).hexdigest()[:16]


@dataclass
class SessionRecord:
    """Analysed request as persisted"""

    user_hash: str
    text: str
    emotion: str
    confidence: float
    method: str
    lang: str
    details: dict[str, Any] = field(default_factory=dict)
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_decision(
        cls,
        decision: EnsembleDecision,
        text: str,
        lang: str,
        user_hash: str,
        details: dict[str, Any] | None = None,
    ) -> "SessionRecord":
        return cls(
            user_hash=user_hash,
            text=text,
            emotion=decision.emotion.value,
            confidence=decision.confidence,
            method=decision.method.value,
            lang=lang,
            details=details if details is not None else dict(decision.details),
        )

    def to_dict(self) -> dict[str, Any]:
        """Store layout (camelCase keys)"""
        return {
            "sessionId": self.session_id,
            "userHash": self.user_hash,
            "timestamp": self.timestamp.isoformat(),
            "text": self.text,
            "emotion": self.emotion,
            "confidence": self.confidence,
            "method": self.method,
            "lang": self.lang,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionRecord":
        return cls(
            session_id=data["sessionId"],
            user_hash=data.get("userHash", ""),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            text=data.get("text", ""),
            emotion=data.get("emotion", "neutral"),
            confidence=data.get("confidence", 0.5),
            method=data.get("method", "ensemble-only"),
            lang=data.get("lang", "en"),
            details=data.get("details", {}),
        )
