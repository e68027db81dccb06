from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from omnirag.knowledge.samples import SAMPLE_DOCUMENTS
from omnirag.rag.context import NO_CONTEXT
from omnirag.rag.gateway import ERROR_MESSAGE, GenerationGateway
from omnirag.rag.llm import BASE_SYSTEM_INSTRUCTION, GenerationError
from omnirag.rag.pipeline import RAGPipeline
from omnirag.rag.types import Document

pytestmark = pytest.mark.anyio


@dataclass
class RecordingGenerator:
    reply: str = "Grounded answer."
    model: str = "fake"
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def complete(self, prompt: str, system_instruction: str) -> str:
        self.calls.append((prompt, system_instruction))
        return self.reply


@dataclass
class BrokenGenerator:
    model: str = "fake"

    async def complete(self, prompt: str, system_instruction: str) -> str:
        raise GenerationError("401 Unauthorized")


def build_pipeline(generator=None, max_documents: int = 5) -> RAGPipeline:
    gateway = GenerationGateway(generator=generator or RecordingGenerator())
    return RAGPipeline(gateway=gateway, max_documents=max_documents)


async def test_answer_returns_titles_in_relevance_order() -> None:
    generator = RecordingGenerator()
    pipeline = build_pipeline(generator)

    response = await pipeline.answer("What is the refund eligibility window?", SAMPLE_DOCUMENTS)

    assert response.text == "Grounded answer."
    assert response.retrieved_context[0] == "Customer Support Playbook - Refund Process"
    assert response.fallback is False
    prompt, _ = generator.calls[0]
    assert prompt.index("Source: Customer Support Playbook") < prompt.index("USER QUERY:")


async def test_answer_uses_base_instruction_when_none_given() -> None:
    generator = RecordingGenerator()
    pipeline = build_pipeline(generator)

    await pipeline.answer("warranty", SAMPLE_DOCUMENTS)
    await pipeline.answer("warranty", SAMPLE_DOCUMENTS, system_instruction="Answer like a pirate.")

    assert generator.calls[0][1] == BASE_SYSTEM_INSTRUCTION
    assert generator.calls[1][1] == "Answer like a pirate."


async def test_answer_falls_back_to_recent_documents() -> None:
    pipeline = build_pipeline()

    response = await pipeline.answer("xylophone", SAMPLE_DOCUMENTS)

    assert response.fallback is True
    assert response.retrieved_context == [
        "Project Apollo - Product Specifications",
        "Employee Remote Work Policy (Global)",
        "Customer Support Playbook - Refund Process",
    ]


async def test_answer_without_active_documents_sends_sentinel() -> None:
    generator = RecordingGenerator()
    pipeline = build_pipeline(generator)
    inactive = [
        Document(id="1", title="Old", content="remote work", upload_date="2024-01-01", active=False)
    ]

    response = await pipeline.answer("remote work", inactive)

    assert response.retrieved_context == []
    assert NO_CONTEXT in generator.calls[0][0]


async def test_generation_failure_clears_retrieved_context() -> None:
    pipeline = build_pipeline(BrokenGenerator())

    response = await pipeline.answer("warranty", SAMPLE_DOCUMENTS)

    assert response.text == ERROR_MESSAGE
    assert response.retrieved_context == []
    assert response.failed is True


async def test_max_documents_limits_context() -> None:
    pipeline = build_pipeline(max_documents=1)

    response = await pipeline.answer("xylophone", SAMPLE_DOCUMENTS)

    assert response.retrieved_context == ["Project Apollo - Product Specifications"]
