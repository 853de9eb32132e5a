"""
LLM client for JSON code explanations.
Supports OpenAI GPT models and Anthropic Claude.
"""

import logging
from typing import Optional

from openai import AsyncOpenAI
import openai
import anthropic

from config.settings import settings
from services.explainer.errors import ServiceUnavailableError


logger = logging.getLogger(__name__)


class CodeLLM:
    """
    Thin provider wrapper returning the model's raw text.

    Supports:
    - OpenAI: gpt-4o-mini (default), gpt-4o; JSON mode is requested
    - Anthropic: claude models; JSON is requested by prompt only

    Single attempt, no streaming, no retry. Every provider-side failure
    (connection, timeout, rate limit, API status error, missing key) is
    raised as ServiceUnavailableError.
    """

    def __init__(
        self,
        provider: str = None,
        model: str = None,
        api_key: str = None,
        max_tokens: int = None,
        temperature: float = None,
    ):
        self.provider = provider or settings.LLM_PROVIDER
        self.model = model or settings.LLM_MODEL
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self.temperature = temperature if temperature is not None else settings.LLM_TEMPERATURE

        if self.provider not in ("openai", "anthropic"):
            raise ValueError(f"Unknown provider: {self.provider}")

        if api_key is None:
            api_key = (
                settings.OPENAI_API_KEY if self.provider == "openai"
                else settings.ANTHROPIC_API_KEY
            )
        self.api_key = api_key

        self.openai_client: Optional[AsyncOpenAI] = None
        self.anthropic_client: Optional[anthropic.AsyncAnthropic] = None

        # Clients are only built when a key is present; calls without one
        # fail with ServiceUnavailableError instead of at startup
        if self.api_key:
            if self.provider == "openai":
                self.openai_client = AsyncOpenAI(api_key=self.api_key)
            else:
                self.anthropic_client = anthropic.AsyncAnthropic(api_key=self.api_key)

    async def generate_json(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = None,
        temperature: float = None,
    ) -> str:
        """
        Generate a complete JSON response from the LLM.

        Args:
            system_prompt: System instructions for the LLM
            user_prompt: User message with the code
            max_tokens: Maximum response length
            temperature: Sampling temperature (0-1)

        Returns:
            The model's message text (expected to be a JSON object)
        """
        max_tokens = max_tokens or self.max_tokens
        temperature = temperature if temperature is not None else self.temperature

        if not self.api_key:
            logger.error("No API key configured for provider %s", self.provider)
            raise ServiceUnavailableError()

        try:
            if self.provider == "openai":
                return await self._generate_openai(
                    system_prompt=system_prompt,
                    user_prompt=user_prompt,
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
            return await self._generate_anthropic(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except (openai.APIError, anthropic.APIError) as e:
            logger.error("%s API error (%s): %s", self.provider, type(e).__name__, e)
            raise ServiceUnavailableError() from e

    async def _generate_openai(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Generate using OpenAI API in JSON mode."""
        response = await self.openai_client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
            max_tokens=max_tokens,
            temperature=temperature,
        )

        return response.choices[0].message.content or ""

    async def _generate_anthropic(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Generate using Anthropic API."""
        response = await self.anthropic_client.messages.create(
            model=self.model,
            system=system_prompt,
            messages=[
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
        )

        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
