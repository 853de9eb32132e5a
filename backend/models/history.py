"""
Pydantic models for history records.
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NewHistoryRecord(BaseModel):
    """Insert payload for the history store."""

    code: str
    language: str
    explanation: str = Field(..., description="Serialized ExplanationResult (JSON)")
    detected_language: str
    response_time_ms: int = Field(..., ge=0, description="Provider latency in milliseconds")


class HistoryRecord(NewHistoryRecord):
    """Stored, append-only analytics entry for one completed request."""

    id: int
    created_at: datetime = Field(default_factory=_utcnow)
