"""
Shared fixtures for backend tests.
Run with: python -m pytest tests/ -v
"""

import json
import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.explanation import ExplanationResult
from services.explainer.client import ExplanationServiceClient
from services.history.store import InMemoryHistoryStore


HELLO_WORLD_PAYLOAD = {
    "explanation": 'This code prints "Hello, World!" to the console.',
    "detectedLanguage": "javascript",
    "keyPoints": [
        "Uses console.log() function",
        "Outputs a string literal",
        "Runs synchronously",
    ],
    "stepByStep": [
        {"step": "Call console.log", "description": "Writes its argument to stdout", "color": "blue"},
    ],
    "concepts": [
        {"name": "Function call", "description": "Invoking a built-in function"},
    ],
    "performanceNotes": "Constant time; nothing to optimize.",
    "complexityAnalysis": {
        "timeComplexity": "O(1)",
        "spaceComplexity": "O(1)",
        "analysis": "A single print statement.",
    },
}


class FakeLLM:
    """Records prompts and answers with canned text (or raises)."""

    def __init__(self, response=None, error: Exception = None, model: str = "fake-model"):
        if isinstance(response, dict):
            response = json.dumps(response)
        self.response = response
        self.error = error
        self.model = model
        self.calls = []

    async def generate_json(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt})
        if self.error is not None:
            raise self.error
        return self.response


class FailingStore:
    """History store whose writes always fail."""

    def __init__(self):
        self.attempts = 0

    async def create(self, record):
        self.attempts += 1
        raise OSError("disk full")


def make_result(explanation: str, language: str = "python") -> ExplanationResult:
    return ExplanationResult(explanation=explanation, detected_language=language)


@pytest.fixture
def fake_llm():
    return FakeLLM(response=HELLO_WORLD_PAYLOAD)


@pytest.fixture
def history_store():
    return InMemoryHistoryStore()


@pytest.fixture
def explainer(fake_llm):
    return ExplanationServiceClient(fake_llm)
