"""
LLM client tests with stubbed provider SDK clients.
"""

from types import SimpleNamespace

import httpx
import openai
import anthropic
import pytest

from services.explainer.errors import ServiceUnavailableError
from services.llm.client import CodeLLM


OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class StubCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _openai_llm(completions: StubCompletions) -> CodeLLM:
    llm = CodeLLM(
        provider="openai",
        model="gpt-4o-mini",
        api_key="test-key",
        max_tokens=2000,
        temperature=0.7,
    )
    llm.openai_client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return llm


async def test_openai_request_parameters():
    completions = StubCompletions(content='{"explanation": "x", "detectedLanguage": "Go"}')
    llm = _openai_llm(completions)

    text = await llm.generate_json(system_prompt="sys", user_prompt="user")

    assert text == '{"explanation": "x", "detectedLanguage": "Go"}'
    assert completions.kwargs["model"] == "gpt-4o-mini"
    assert completions.kwargs["response_format"] == {"type": "json_object"}
    assert completions.kwargs["temperature"] == 0.7
    assert completions.kwargs["max_tokens"] == 2000
    assert "stream" not in completions.kwargs
    assert completions.kwargs["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "user"},
    ]


async def test_openai_empty_message_returns_empty_text():
    llm = _openai_llm(StubCompletions(content=None))
    assert await llm.generate_json(system_prompt="s", user_prompt="u") == ""


@pytest.mark.parametrize(
    "error",
    [
        openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL)),
        openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL)),
        openai.RateLimitError(
            "Rate limit reached",
            response=httpx.Response(429, request=httpx.Request("POST", OPENAI_URL)),
            body=None,
        ),
        openai.InternalServerError(
            "Bad gateway",
            response=httpx.Response(502, request=httpx.Request("POST", OPENAI_URL)),
            body=None,
        ),
    ],
)
async def test_openai_transport_errors_become_service_unavailable(error):
    llm = _openai_llm(StubCompletions(error=error))

    with pytest.raises(ServiceUnavailableError) as exc_info:
        await llm.generate_json(system_prompt="s", user_prompt="u")

    assert exc_info.value.__cause__ is error


async def test_missing_api_key_is_service_unavailable():
    llm = CodeLLM(provider="openai", api_key="")

    assert llm.openai_client is None
    with pytest.raises(ServiceUnavailableError):
        await llm.generate_json(system_prompt="s", user_prompt="u")


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError):
        CodeLLM(provider="mystery", api_key="k")


async def test_anthropic_text_blocks_are_joined():
    calls = {}

    async def create(**kwargs):
        calls.update(kwargs)
        return SimpleNamespace(content=[
            SimpleNamespace(type="text", text='{"explanation": "a", '),
            SimpleNamespace(type="text", text='"detectedLanguage": "Rust"}'),
        ])

    llm = CodeLLM(provider="anthropic", model="claude-3-haiku-20240307", api_key="test-key")
    llm.anthropic_client = SimpleNamespace(messages=SimpleNamespace(create=create))

    text = await llm.generate_json(system_prompt="sys", user_prompt="user")

    assert text == '{"explanation": "a", "detectedLanguage": "Rust"}'
    assert calls["system"] == "sys"
    assert calls["messages"] == [{"role": "user", "content": "user"}]


async def test_anthropic_errors_become_service_unavailable():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")

    async def create(**kwargs):
        raise anthropic.APIConnectionError(request=request)

    llm = CodeLLM(provider="anthropic", api_key="test-key")
    llm.anthropic_client = SimpleNamespace(messages=SimpleNamespace(create=create))

    with pytest.raises(ServiceUnavailableError):
        await llm.generate_json(system_prompt="s", user_prompt="u")
