from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from omnirag.app.settings import settings
from omnirag.chat.session import ChatSession
from omnirag.knowledge.samples import SAMPLE_DOCUMENTS
from omnirag.knowledge.store import DocumentStore
from omnirag.rag.gateway import GenerationGateway
from omnirag.rag.llm import GenerationError, Generator, build_generator
from omnirag.rag.pipeline import RAGPipeline

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Runtime-editable pipeline settings."""
    system_instruction: str


@lru_cache
def get_generator() -> Generator | None:
    try:
        return build_generator(
            settings.provider,
            api_key_gemini=settings.gemini_api_key,
            api_key_openai=settings.openai_api_key,
            gemini_model=settings.gemini_chat_model,
            openai_base_url=settings.openai_base_url,
            openai_model=settings.openai_chat_model,
            ollama_base_url=settings.ollama_base_url,
            ollama_model=settings.ollama_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout,
        )
    except GenerationError as exc:
        logger.warning("generator_not_configured", extra={"detail": str(exc)})
        return None


@lru_cache
def get_pipeline() -> RAGPipeline:
    gateway = GenerationGateway(generator=get_generator(), timeout=settings.llm_timeout)
    return RAGPipeline(gateway=gateway, max_documents=settings.max_documents)


@lru_cache
def get_document_store() -> DocumentStore:
    store = DocumentStore()
    if settings.seed_samples:
        store.add_documents(SAMPLE_DOCUMENTS)
    return store


@lru_cache
def get_chat_session() -> ChatSession:
    return ChatSession(pipeline=get_pipeline())


@lru_cache
def get_pipeline_config() -> PipelineConfig:
    return PipelineConfig(system_instruction=settings.default_system_instruction)


def reset_state_cache() -> None:
    get_generator.cache_clear()
    get_pipeline.cache_clear()
    get_document_store.cache_clear()
    get_chat_session.cache_clear()
    get_pipeline_config.cache_clear()
