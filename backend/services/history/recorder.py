"""
Best-effort history recording.
"""

import logging
from typing import Optional

from models.explanation import ExplainRequest, ExplanationResult
from models.history import NewHistoryRecord, HistoryRecord
from services.explainer.errors import PersistenceError
from services.history.store import HistoryStore


logger = logging.getLogger(__name__)


class HistoryRecorder:
    """
    Writes one record per completed explanation.

    Failures are logged and dropped: a lost record never fails the
    user-facing request.
    """

    def __init__(self, store: HistoryStore):
        self.store = store

    async def record(
        self,
        request: ExplainRequest,
        result: ExplanationResult,
    ) -> Optional[HistoryRecord]:
        """Persist a request/result pair. Returns None if the write failed."""
        try:
            return await self._write(request, result)
        except PersistenceError as e:
            logger.warning("Failed to store explanation: %s", e)
            return None

    async def _write(
        self,
        request: ExplainRequest,
        result: ExplanationResult,
    ) -> HistoryRecord:
        # Building the record can fail too (e.g. a negative latency);
        # store backends raise their own types (OSError, driver errors)
        try:
            record = NewHistoryRecord(
                code=request.code,
                language=request.language,
                explanation=result.model_dump_json(by_alias=True, exclude_none=True),
                detected_language=result.detected_language,
                response_time_ms=round(result.response_time * 1000),
            )
            return await self.store.create(record)
        except Exception as e:
            raise PersistenceError(f"{type(e).__name__}: {e}") from e
