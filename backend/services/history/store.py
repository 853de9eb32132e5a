"""
Append-only history stores.

Only insertion is part of the contract; nothing in the request path reads
records back.
"""

import asyncio
import json
import os
from typing import List, Protocol

from models.history import NewHistoryRecord, HistoryRecord


class HistoryStore(Protocol):
    async def create(self, record: NewHistoryRecord) -> HistoryRecord:
        ...


class InMemoryHistoryStore:
    """
    List-backed store for development and tests.

    Ids are sequential from 1. Records are lost on restart.
    """

    def __init__(self):
        self._records: List[HistoryRecord] = []
        self._next_id = 1

    async def create(self, record: NewHistoryRecord) -> HistoryRecord:
        stored = HistoryRecord(id=self._next_id, **record.model_dump())
        self._next_id += 1
        self._records.append(stored)
        return stored

    @property
    def records(self) -> List[HistoryRecord]:
        """Snapshot copy, for inspection."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)


class JsonlHistoryStore:
    """
    JSON-lines file store.

    One line per record, appended; ids continue from the number of lines
    already in the file. Writes run in a worker thread and are serialized
    by an asyncio lock.
    """

    def __init__(self, path: str):
        self.path = path
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)

        self._lock = asyncio.Lock()
        self._next_id = self._count_lines() + 1

    def _count_lines(self) -> int:
        if not os.path.exists(self.path):
            return 0
        with open(self.path, "r", encoding="utf-8") as f:
            return sum(1 for line in f if line.strip())

    def _append(self, line: str) -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    async def create(self, record: NewHistoryRecord) -> HistoryRecord:
        async with self._lock:
            stored = HistoryRecord(id=self._next_id, **record.model_dump())
            line = json.dumps(stored.model_dump(mode="json"), ensure_ascii=False)
            await asyncio.to_thread(self._append, line)
            self._next_id += 1
            return stored


def create_history_store(settings) -> HistoryStore:
    """Build the store selected by HISTORY_BACKEND."""
    if settings.HISTORY_BACKEND == "jsonl":
        return JsonlHistoryStore(settings.HISTORY_FILE)
    return InMemoryHistoryStore()
