from __future__ import annotations

"""Text generation backends for the RAG gateway."""

from dataclasses import dataclass, field
import asyncio
import logging
from typing import Protocol

import httpx


class GenerationError(RuntimeError):
    """Raised when a generation request fails or returns an invalid payload."""
    pass


logger = logging.getLogger(__name__)


BASE_SYSTEM_INSTRUCTION = (
    "You are an expert Knowledge Assistant named OmniRAG. "
    "Your goal is to answer user queries accurately based ONLY on the provided context "
    "from the knowledge base. "
    "If the answer is not in the context, politely state that you do not have that "
    "information in your knowledge base. "
    "Maintain a professional, helpful, and concise tone. "
    "Avoid hallucinations. Always cite the specific document title if possible when answering."
)

DEFAULT_TEMPERATURE = 0.3


class Generator(Protocol):
    """External text generation capability."""
    model: str

    async def complete(self, prompt: str, system_instruction: str) -> str:
        ...


@dataclass(frozen=True)
class GeminiGenerator:
    """Generator backed by Gemini generative models."""
    api_key: str
    model: str = "gemini-2.5-flash"
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int | None = None

    async def complete(self, prompt: str, system_instruction: str) -> str:
        """Generate text with Gemini, returning an empty string when no text comes back."""
        try:
            import google.generativeai as genai
        except ImportError as exc:
            raise GenerationError("google-generativeai is required for GeminiGenerator") from exc

        def _run() -> str:
            genai.configure(api_key=self.api_key)
            model = genai.GenerativeModel(self.model, system_instruction=system_instruction)
            config: dict[str, float | int] = {"temperature": self.temperature}
            if self.max_tokens:
                config["max_output_tokens"] = self.max_tokens
            response = model.generate_content(
                [{"role": "user", "parts": [prompt]}],
                generation_config=config,
            )
            try:
                return response.text or ""
            except ValueError:
                # Raised by the SDK when the candidate carries no text parts.
                return ""

        try:
            return await asyncio.to_thread(_run)
        except Exception as exc:
            raise GenerationError(str(exc)) from exc


@dataclass(frozen=True)
class OllamaGenerator:
    """Generator backed by the Ollama chat API."""
    base_url: str
    model: str
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int | None = None
    timeout: float = 60.0
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False, compare=False)

    async def complete(self, prompt: str, system_instruction: str) -> str:
        """Generate text using Ollama."""
        options: dict[str, float | int] = {"temperature": self.temperature}
        if self.max_tokens:
            options["num_predict"] = self.max_tokens
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "options": options,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(f"{self.base_url}/api/chat", json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise GenerationError(str(exc)) from exc
        message = data.get("message") or {}
        content = message.get("content")
        if content is None:
            return ""
        if not isinstance(content, str):
            raise GenerationError("Invalid Ollama response content")
        return content


@dataclass(frozen=True)
class OpenAIGenerator:
    """Generator backed by an OpenAI-compatible chat completions API."""
    api_key: str
    base_url: str
    model: str
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int | None = None
    timeout: float = 60.0
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False, compare=False)

    async def complete(self, prompt: str, system_instruction: str) -> str:
        """Generate text using OpenAI chat completions."""
        payload: dict[str, object] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
        }
        if self.max_tokens:
            payload["max_tokens"] = self.max_tokens
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=headers,
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise GenerationError(str(exc)) from exc

        choices = data.get("choices") or []
        if not choices:
            raise GenerationError("Invalid OpenAI response")
        message = choices[0].get("message") or {}
        content = message.get("content")
        if content is None:
            return ""
        if not isinstance(content, str):
            raise GenerationError("Invalid OpenAI response content")
        return content


def build_generator(
    provider: str,
    *,
    api_key_gemini: str | None,
    api_key_openai: str | None,
    gemini_model: str,
    openai_base_url: str,
    openai_model: str | None,
    ollama_base_url: str,
    ollama_model: str,
    temperature: float,
    max_tokens: int | None,
    timeout: float,
) -> GeminiGenerator | OllamaGenerator | OpenAIGenerator:
    """Factory for generators based on provider."""
    normalized = provider.strip().lower()
    if normalized in {"gemini", "google"}:
        if not api_key_gemini:
            raise GenerationError("GEMINI_API_KEY is required for Gemini provider")
        return GeminiGenerator(
            api_key=api_key_gemini,
            model=gemini_model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
    if normalized == "openai":
        if not api_key_openai:
            raise GenerationError("OPENAI_API_KEY is required for OpenAI provider")
        if not openai_model:
            raise GenerationError("OPENAI_CHAT_MODEL is required for OpenAI provider")
        return OpenAIGenerator(
            api_key=api_key_openai,
            base_url=openai_base_url.rstrip("/"),
            model=openai_model,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
        )
    if normalized == "ollama":
        return OllamaGenerator(
            base_url=ollama_base_url.rstrip("/"),
            model=ollama_model,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
        )
    raise GenerationError(f"Unsupported LLM provider: {provider}")
