from __future__ import annotations

"""Core data types for documents, retrieval and chat."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class DocumentType(str, Enum):
    """Declared document format. Informational only, never scored."""
    PDF = "PDF"
    MARKDOWN = "Markdown"
    TEXT = "Text"


@dataclass(frozen=True)
class Document:
    """Knowledge base document."""
    id: str
    title: str
    content: str
    upload_date: str
    type: DocumentType = DocumentType.TEXT
    active: bool = True


@dataclass(frozen=True)
class ScoredCandidate:
    """Document paired with its relevance score for a single query."""
    document: Document
    score: int
    recency_key: float


@dataclass(frozen=True)
class Retrieval:
    """Ordered selection plus whether the zero-score fallback produced it."""
    documents: tuple[Document, ...]
    fallback: bool = False

    @property
    def titles(self) -> list[str]:
        return [document.title for document in self.documents]


@dataclass(frozen=True)
class GenerationResult:
    """Text returned by the generation gateway."""
    text: str
    ok: bool = True


@dataclass(frozen=True)
class RAGResponse:
    """Answer text and the titles of documents used as context, in order."""
    text: str
    retrieved_context: list[str] = field(default_factory=list)
    fallback: bool = False
    failed: bool = False


Role = Literal["user", "model"]
Feedback = Literal["positive", "negative"]


@dataclass
class ChatMessage:
    """Single chat turn shown in the transcript."""
    id: str
    role: Role
    text: str
    timestamp: int
    retrieved_context: list[str] | None = None
    thinking_time: int | None = None
    feedback: Feedback | None = None


@dataclass(frozen=True)
class ChatExchange:
    """Transcript record for one user query and the model reply."""
    user_text: str
    model_text: str
    retrieved_context: list[str]
    latency_ms: int
    message_id: str
    fallback: bool = False
    generation_failed: bool = False
