from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class DocumentOut(BaseModel):
    id: str
    title: str
    type: Literal["PDF", "Markdown", "Text"]
    content: str
    upload_date: str
    active: bool
    char_count: int


class DocumentCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    type: Literal["PDF", "Markdown", "Text"] | None = None
    upload_date: str | None = None


class DocumentListResponse(BaseModel):
    documents: list[DocumentOut]
    document_count: int
    active_count: int


class FileIngestResponse(BaseModel):
    documents: list[DocumentOut]
    ingested: int
    failed: list[str] = Field(default_factory=list)


class DeleteDocumentResponse(BaseModel):
    deleted: str


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    system_instruction: str | None = None


class ChatResponse(BaseModel):
    user_text: str
    model_text: str
    retrieved_context: list[str]
    latency_ms: int
    message_id: str
    request_id: str


class ChatMessageOut(BaseModel):
    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: int
    retrieved_context: list[str] | None = None
    thinking_time: int | None = None
    feedback: Literal["positive", "negative"] | None = None


class ChatHistoryResponse(BaseModel):
    messages: list[ChatMessageOut]
    is_thinking: bool


class FeedbackRequest(BaseModel):
    feedback: Literal["positive", "negative"]


class EvaluationMetricOut(BaseModel):
    name: str
    value: float
    trend: Literal["up", "down", "stable"]
    description: str


class EvaluationResponse(BaseModel):
    metrics: list[EvaluationMetricOut]
    feedback: dict[str, int]
    exchanges: int


class SystemInstructionPayload(BaseModel):
    system_instruction: str = Field(min_length=1)
