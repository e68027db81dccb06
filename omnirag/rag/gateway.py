from __future__ import annotations

"""Boundary around the external generator that never raises."""

from dataclasses import dataclass
import asyncio
import logging

from omnirag.rag.context import build_prompt
from omnirag.rag.llm import Generator
from omnirag.rag.types import GenerationResult

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Error generating response. Please check your API key or network connection."
TIMEOUT_MESSAGE = "Error generating response. The language model did not respond in time."
EMPTY_RESPONSE_MESSAGE = (
    "I apologize, but I couldn't generate a response based on the available context."
)


@dataclass(frozen=True)
class GenerationGateway:
    """Send the assembled prompt to a generator and map failures to fixed messages.

    ``generator`` may be None when no provider is configured; every call then
    yields the error message, matching a failed request.
    """
    generator: Generator | None
    timeout: float | None = 60.0

    async def generate(
        self,
        query: str,
        context_block: str,
        system_instruction: str,
    ) -> GenerationResult:
        """Generate an answer for the query grounded on the context block."""
        if self.generator is None:
            logger.error("generation_failed", extra={"detail": "generator_not_configured"})
            return GenerationResult(text=ERROR_MESSAGE, ok=False)
        prompt = build_prompt(query, context_block)
        try:
            text = await asyncio.wait_for(
                self.generator.complete(prompt, system_instruction),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(
                "generation_timeout",
                extra={"model": self.generator.model, "timeout": self.timeout},
            )
            return GenerationResult(text=TIMEOUT_MESSAGE, ok=False)
        except Exception as exc:
            logger.error(
                "generation_failed",
                extra={"model": self.generator.model, "detail": type(exc).__name__},
                exc_info=True,
            )
            return GenerationResult(text=ERROR_MESSAGE, ok=False)
        if not text or not text.strip():
            return GenerationResult(text=EMPTY_RESPONSE_MESSAGE)
        return GenerationResult(text=text)
