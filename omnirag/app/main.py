from __future__ import annotations

"""FastAPI application entrypoint for the OmniRAG knowledge assistant."""

import logging
import uuid

from fastapi import FastAPI, File, HTTPException, Request, UploadFile

from omnirag.app.dependencies import (
    get_chat_session,
    get_document_store,
    get_pipeline_config,
)
from omnirag.app.evaluation import INITIAL_METRICS
from omnirag.app.metrics import metrics_middleware, metrics_response, record_exchange
from omnirag.app.schemas import (
    ChatHistoryResponse,
    ChatMessageOut,
    ChatRequest,
    ChatResponse,
    DeleteDocumentResponse,
    DocumentCreateRequest,
    DocumentListResponse,
    DocumentOut,
    EvaluationMetricOut,
    EvaluationResponse,
    FeedbackRequest,
    FileIngestResponse,
    SystemInstructionPayload,
)
from omnirag.app.settings import settings
from omnirag.chat.session import ConversationBusyError, MessageNotFoundError
from omnirag.knowledge.store import DocumentNotFoundError
from omnirag.loaders.ingest import ExtractedFile, extract_file
from omnirag.rag.types import ChatMessage, Document, DocumentType

logger = logging.getLogger(__name__)

app = FastAPI(title="OmniRAG", version="0.1.0")


def _configure_logging() -> None:
    """Configure root logging using environment settings."""
    level_name = settings.log_level.strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logger.setLevel(level)


_configure_logging()


def _document_out(document: Document) -> DocumentOut:
    return DocumentOut(
        id=document.id,
        title=document.title,
        type=document.type.value,
        content=document.content,
        upload_date=document.upload_date,
        active=document.active,
        char_count=len(document.content),
    )


def _message_out(message: ChatMessage) -> ChatMessageOut:
    return ChatMessageOut(
        id=message.id,
        role=message.role,
        text=message.text,
        timestamp=message.timestamp,
        retrieved_context=message.retrieved_context,
        thinking_time=message.thinking_time,
        feedback=message.feedback,
    )


async def _read_upload_bytes(upload: UploadFile, max_bytes: int | None) -> bytes:
    """Stream upload bytes with a hard size limit."""
    if not max_bytes or max_bytes <= 0:
        return await upload.read()
    buffer = bytearray()
    while True:
        chunk = await upload.read(65536)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File exceeds maximum size of {max_bytes} bytes",
            )
    return bytes(buffer)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Attach or create a request ID for traceability."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    """Capture request metrics before returning the response."""
    return await metrics_middleware(request, call_next)


@app.get("/metrics")
async def metrics():
    """Expose Prometheus-style metrics."""
    return metrics_response()


@app.get("/health")
async def health() -> dict[str, str]:
    """Simple health probe for uptime checks."""
    return {"status": "ok"}


@app.get("/documents", response_model=DocumentListResponse)
async def list_documents() -> DocumentListResponse:
    """List every document in the knowledge base."""
    store = get_document_store()
    stats = store.stats()
    return DocumentListResponse(
        documents=[_document_out(doc) for doc in store.list_documents()],
        document_count=stats["document_count"],
        active_count=stats["active_count"],
    )


@app.post("/documents", response_model=DocumentOut)
async def create_document(request: DocumentCreateRequest) -> DocumentOut:
    """Add a document from a title and pasted content."""
    store = get_document_store()
    doc_type = DocumentType(request.type) if request.type else None
    document = store.add(
        title=request.title,
        content=request.content,
        doc_type=doc_type,
        upload_date=request.upload_date,
    )
    logger.info(
        "document_ingested",
        extra={"doc_id": document.id, "type": document.type.value, "chars": len(document.content)},
    )
    return _document_out(document)


@app.post("/documents/files", response_model=FileIngestResponse)
async def ingest_files(files: list[UploadFile] = File(...)) -> FileIngestResponse:
    """Extract text from uploaded files and add them to the knowledge base."""
    if not files:
        raise HTTPException(status_code=400, detail="No files provided")
    store = get_document_store()
    extracted_files: list[ExtractedFile] = []
    failed: list[str] = []
    for idx, upload in enumerate(files, start=1):
        filename = upload.filename or f"upload-{idx}"
        data = await _read_upload_bytes(upload, settings.file_max_bytes)
        if not data:
            failed.append(filename)
            continue
        extracted = extract_file(data, filename, upload.content_type)
        if not extracted.ok:
            failed.append(filename)
        extracted_files.append(extracted)
    if not extracted_files:
        raise HTTPException(status_code=400, detail="No valid file content provided")

    created: list[DocumentOut] = []
    for extracted in extracted_files:
        document = store.add(
            title=extracted.title,
            content=extracted.content,
            doc_type=extracted.type,
        )
        logger.info(
            "document_ingested",
            extra={
                "doc_id": document.id,
                "type": document.type.value,
                "chars": len(document.content),
                "extracted": extracted.ok,
            },
        )
        created.append(_document_out(document))
    return FileIngestResponse(documents=created, ingested=len(created), failed=failed)


@app.post("/documents/{doc_id}/toggle", response_model=DocumentOut)
async def toggle_document(doc_id: str) -> DocumentOut:
    """Activate or deactivate a document for retrieval."""
    try:
        document = get_document_store().toggle(doc_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Document not found") from exc
    return _document_out(document)


@app.delete("/documents/{doc_id}", response_model=DeleteDocumentResponse)
async def delete_document(doc_id: str) -> DeleteDocumentResponse:
    """Remove a document from the knowledge base."""
    try:
        document = get_document_store().delete(doc_id)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Document not found") from exc
    logger.info("document_deleted", extra={"doc_id": document.id})
    return DeleteDocumentResponse(deleted=document.id)


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, http_request: Request) -> ChatResponse:
    """Answer a message using the active documents as context."""
    request_id = getattr(http_request.state, "request_id", str(uuid.uuid4()))
    session = get_chat_session()
    instruction = request.system_instruction or get_pipeline_config().system_instruction
    try:
        exchange = await session.send(
            request.message,
            get_document_store().snapshot(),
            system_instruction=instruction,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ConversationBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    record_exchange(exchange.latency_ms, exchange.generation_failed, exchange.fallback)
    logger.info(
        "chat_completed",
        extra={
            "request_id": request_id,
            "sources": len(exchange.retrieved_context),
            "fallback": exchange.fallback,
            "generation_failed": exchange.generation_failed,
            "latency_ms": exchange.latency_ms,
        },
    )
    return ChatResponse(
        user_text=exchange.user_text,
        model_text=exchange.model_text,
        retrieved_context=exchange.retrieved_context,
        latency_ms=exchange.latency_ms,
        message_id=exchange.message_id,
        request_id=request_id,
    )


@app.get("/chat/history", response_model=ChatHistoryResponse)
async def chat_history() -> ChatHistoryResponse:
    session = get_chat_session()
    return ChatHistoryResponse(
        messages=[_message_out(message) for message in session.history],
        is_thinking=session.is_thinking,
    )


@app.delete("/chat/history", response_model=ChatHistoryResponse)
async def clear_chat_history() -> ChatHistoryResponse:
    session = get_chat_session()
    session.clear()
    return ChatHistoryResponse(messages=[], is_thinking=session.is_thinking)


@app.post("/chat/{message_id}/feedback", response_model=ChatMessageOut)
async def chat_feedback(message_id: str, request: FeedbackRequest) -> ChatMessageOut:
    """Record thumbs up or down on a model reply."""
    try:
        message = get_chat_session().set_feedback(message_id, request.feedback)
    except MessageNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Message not found") from exc
    return _message_out(message)


@app.get("/evaluation", response_model=EvaluationResponse)
async def evaluation() -> EvaluationResponse:
    """Return dashboard metrics plus live feedback counts."""
    session = get_chat_session()
    exchanges = sum(1 for message in session.history if message.role == "model")
    return EvaluationResponse(
        metrics=[EvaluationMetricOut(**metric.__dict__) for metric in INITIAL_METRICS],
        feedback=session.feedback_counts(),
        exchanges=exchanges,
    )


@app.get("/settings/system-instruction", response_model=SystemInstructionPayload)
async def get_system_instruction() -> SystemInstructionPayload:
    return SystemInstructionPayload(system_instruction=get_pipeline_config().system_instruction)


@app.put("/settings/system-instruction", response_model=SystemInstructionPayload)
async def update_system_instruction(request: SystemInstructionPayload) -> SystemInstructionPayload:
    """Replace the persona prompt used for new chat messages."""
    config = get_pipeline_config()
    config.system_instruction = request.system_instruction
    logger.info("system_instruction_updated", extra={"length": len(config.system_instruction)})
    return SystemInstructionPayload(system_instruction=config.system_instruction)
