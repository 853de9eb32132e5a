"""
History store and recorder tests.
"""

import json
import logging

from models.explanation import ExplainRequest, ExplanationResult
from models.history import NewHistoryRecord
from services.history.recorder import HistoryRecorder
from services.history.store import InMemoryHistoryStore, JsonlHistoryStore, create_history_store

from conftest import FailingStore


def _new_record(code="x = 1"):
    return NewHistoryRecord(
        code=code,
        language="python",
        explanation='{"explanation": "Sets x."}',
        detected_language="Python",
        response_time_ms=1234,
    )


async def test_in_memory_store_assigns_sequential_ids():
    store = InMemoryHistoryStore()

    first = await store.create(_new_record("a = 1"))
    second = await store.create(_new_record("b = 2"))

    assert (first.id, second.id) == (1, 2)
    assert first.created_at is not None
    assert [r.code for r in store.records] == ["a = 1", "b = 2"]
    assert len(store) == 2


async def test_jsonl_store_appends_lines(tmp_path):
    path = tmp_path / "nested" / "history.jsonl"
    store = JsonlHistoryStore(str(path))

    await store.create(_new_record("a = 1"))
    await store.create(_new_record("b = 2"))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert json.loads(lines[1])["code"] == "b = 2"
    assert json.loads(lines[1])["id"] == 2


async def test_jsonl_store_continues_ids_after_restart(tmp_path):
    path = str(tmp_path / "history.jsonl")
    await JsonlHistoryStore(path).create(_new_record())

    record = await JsonlHistoryStore(path).create(_new_record())

    assert record.id == 2


def test_create_history_store_uses_backend_setting(tmp_path):
    class Cfg:
        HISTORY_BACKEND = "jsonl"
        HISTORY_FILE = str(tmp_path / "h.jsonl")

    assert isinstance(create_history_store(Cfg), JsonlHistoryStore)

    Cfg.HISTORY_BACKEND = "memory"
    assert isinstance(create_history_store(Cfg), InMemoryHistoryStore)


async def test_recorder_writes_serialized_result():
    store = InMemoryHistoryStore()
    recorder = HistoryRecorder(store)
    request = ExplainRequest(code="print('hi')", language="python")
    result = ExplanationResult(
        explanation="Prints hi.",
        detected_language="Python",
        key_points=["Uses print"],
        response_time=1.5,
    )

    stored = await recorder.record(request, result)

    assert stored.id == 1
    assert stored.code == "print('hi')"
    assert stored.language == "python"
    assert stored.detected_language == "Python"
    assert stored.response_time_ms == 1500
    explanation = json.loads(stored.explanation)
    assert explanation["keyPoints"] == ["Uses print"]
    assert "performanceNotes" not in explanation


async def test_recorder_swallows_store_failures(caplog):
    store = FailingStore()
    recorder = HistoryRecorder(store)
    request = ExplainRequest(code="x = 1", language="python")
    result = ExplanationResult(explanation="Sets x.", detected_language="Python")

    with caplog.at_level(logging.WARNING):
        stored = await recorder.record(request, result)

    assert stored is None
    assert store.attempts == 1
    assert "Failed to store explanation" in caplog.text
    assert "disk full" in caplog.text


async def test_recorder_swallows_unbuildable_records(caplog):
    store = InMemoryHistoryStore()
    recorder = HistoryRecorder(store)
    request = ExplainRequest(code="x = 1", language="python")
    result = ExplanationResult(explanation="Sets x.", detected_language="Python", response_time=-0.002)

    with caplog.at_level(logging.WARNING):
        stored = await recorder.record(request, result)

    assert stored is None
    assert len(store) == 0
    assert "Failed to store explanation" in caplog.text
