"""
Explanation service client.

One call per request: build prompt -> provider -> parse -> normalize.
"""

import logging
import time
from typing import Protocol

from models.explanation import ExplanationResult
from services.explainer.errors import MalformedResponseError
from services.explainer.normalizer import parse_provider_payload, normalize_explanation
from services.llm.prompts import ExplainerPrompts


logger = logging.getLogger(__name__)


class JsonLLM(Protocol):
    """Anything that can turn a system + user prompt into JSON text."""

    model: str

    async def generate_json(self, system_prompt: str, user_prompt: str) -> str:
        ...


class ExplanationServiceClient:
    """
    Explains code through an external model.

    No caching and no retry: identical inputs submitted twice produce two
    provider calls. The full response is awaited before parsing.
    """

    def __init__(self, llm: JsonLLM):
        self.llm = llm

    async def explain(self, code: str, language: str) -> ExplanationResult:
        """
        Explain one snippet.

        Args:
            code: Validated source code, passed through unchanged
            language: Declared language tag

        Returns:
            Normalized result with response_time in seconds

        Raises:
            ServiceUnavailableError: provider call failed
            MalformedResponseError: provider output unusable
        """
        prompt = ExplainerPrompts.build_explain_prompt(code=code, language=language)

        start_time = time.perf_counter()
        text = await self.llm.generate_json(
            system_prompt=ExplainerPrompts.SYSTEM_PROMPT,
            user_prompt=prompt,
        )
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        model = getattr(self.llm, "model", "")
        try:
            payload = parse_provider_payload(text, model=model)
        except MalformedResponseError as e:
            logger.error("Malformed response from %s: %s", model or "provider", e.reason)
            raise

        logger.debug("Explanation from %s in %dms", model or "provider", elapsed_ms)
        return normalize_explanation(payload, response_time=elapsed_ms / 1000)
