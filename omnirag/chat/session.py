from __future__ import annotations

"""Single-user chat transcript driving one RAG cycle at a time."""

import logging
import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Iterable

from omnirag.rag.pipeline import RAGPipeline
from omnirag.rag.types import ChatExchange, ChatMessage, Document, Feedback

logger = logging.getLogger(__name__)


class ConversationBusyError(RuntimeError):
    """Raised when a message is sent while the previous one is still being answered."""
    pass


class MessageNotFoundError(RuntimeError):
    """Raised when feedback targets an unknown message."""
    pass


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ChatSession:
    pipeline: RAGPipeline
    history: list[ChatMessage] = field(default_factory=list)
    is_thinking: bool = False

    async def send(
        self,
        text: str,
        documents: Iterable[Document],
        system_instruction: str | None = None,
    ) -> ChatExchange:
        """Answer a user message and append both turns to the history."""
        if not text.strip():
            raise ValueError("Message text must not be blank")
        if self.is_thinking:
            raise ConversationBusyError("A response is already being generated")
        snapshot = tuple(documents)
        user_message = ChatMessage(
            id=uuid.uuid4().hex,
            role="user",
            text=text,
            timestamp=_now_ms(),
        )
        self.history.append(user_message)
        self.is_thinking = True
        start = time.monotonic()
        try:
            response = await self.pipeline.answer(text, snapshot, system_instruction)
        finally:
            self.is_thinking = False
        latency_ms = int((time.monotonic() - start) * 1000)
        model_message = ChatMessage(
            id=uuid.uuid4().hex,
            role="model",
            text=response.text,
            timestamp=_now_ms(),
            retrieved_context=list(response.retrieved_context),
            thinking_time=latency_ms,
        )
        self.history.append(model_message)
        logger.info(
            "chat_exchange_complete",
            extra={
                "message_id": model_message.id,
                "latency_ms": latency_ms,
                "sources": len(response.retrieved_context),
            },
        )
        return ChatExchange(
            user_text=text,
            model_text=response.text,
            retrieved_context=list(response.retrieved_context),
            latency_ms=latency_ms,
            message_id=model_message.id,
            fallback=response.fallback,
            generation_failed=response.failed,
        )

    def set_feedback(self, message_id: str, feedback: Feedback) -> ChatMessage:
        for idx, message in enumerate(self.history):
            if message.id == message_id:
                updated = replace(message, feedback=feedback)
                self.history[idx] = updated
                return updated
        raise MessageNotFoundError(message_id)

    def clear(self) -> None:
        self.history.clear()

    def feedback_counts(self) -> dict[str, int]:
        """Count positive and negative ratings across model replies."""
        counts = {"positive": 0, "negative": 0}
        for message in self.history:
            if message.feedback in counts:
                counts[message.feedback] += 1
        return counts
