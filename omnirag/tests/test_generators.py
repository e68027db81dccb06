from __future__ import annotations

"""HTTP generator response handling tests."""

import json

import httpx
import pytest

from omnirag.rag.llm import GenerationError, OllamaGenerator, OpenAIGenerator

pytestmark = pytest.mark.anyio


def json_transport(payload: dict, status_code: int = 200, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


def ollama(transport: httpx.MockTransport) -> OllamaGenerator:
    return OllamaGenerator(
        base_url="http://ollama.test",
        model="llama3.2:3b",
        max_tokens=128,
        transport=transport,
    )


def openai(transport: httpx.MockTransport) -> OpenAIGenerator:
    return OpenAIGenerator(
        api_key="key",
        base_url="http://openai.test/v1",
        model="gpt-4o-mini",
        transport=transport,
    )


async def test_ollama_sends_chat_request_and_returns_content() -> None:
    seen: list[httpx.Request] = []
    generator = ollama(json_transport({"message": {"content": "Four days."}}, seen=seen))

    text = await generator.complete("USER QUERY: remote?", "Be concise.")

    assert text == "Four days."
    request = seen[0]
    assert request.url.path == "/api/chat"
    body = json.loads(request.content)
    assert body["stream"] is False
    assert body["options"] == {"temperature": 0.3, "num_predict": 128}
    assert body["messages"][0] == {"role": "system", "content": "Be concise."}


async def test_ollama_missing_content_returns_empty_text() -> None:
    generator = ollama(json_transport({"message": {"content": None}}))
    assert await generator.complete("prompt", "system") == ""


async def test_ollama_non_string_content_fails() -> None:
    generator = ollama(json_transport({"message": {"content": ["not", "text"]}}))
    with pytest.raises(GenerationError):
        await generator.complete("prompt", "system")


async def test_ollama_http_error_fails() -> None:
    generator = ollama(json_transport({"error": "model not found"}, status_code=404))
    with pytest.raises(GenerationError):
        await generator.complete("prompt", "system")


async def test_openai_returns_first_choice_content() -> None:
    seen: list[httpx.Request] = []
    payload = {"choices": [{"message": {"content": "Q3 2025."}}]}
    generator = openai(json_transport(payload, seen=seen))

    text = await generator.complete("When is the launch?", "Be concise.")

    assert text == "Q3 2025."
    request = seen[0]
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer key"
    assert json.loads(request.content)["temperature"] == 0.3


async def test_openai_null_content_returns_empty_text() -> None:
    generator = openai(json_transport({"choices": [{"message": {"content": None}}]}))
    assert await generator.complete("prompt", "system") == ""


@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        {},
        {"choices": [{"message": {"content": 42}}]},
    ],
)
async def test_openai_invalid_payload_fails(payload: dict) -> None:
    generator = openai(json_transport(payload))
    with pytest.raises(GenerationError):
        await generator.complete("prompt", "system")
