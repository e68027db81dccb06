from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from omnirag.rag.context import assemble
from omnirag.rag.gateway import GenerationGateway
from omnirag.rag.llm import BASE_SYSTEM_INSTRUCTION
from omnirag.rag.retrieval import DEFAULT_LIMIT, retrieve
from omnirag.rag.types import Document, RAGResponse, Retrieval

logger = logging.getLogger(__name__)


@dataclass
class RAGPipeline:
    gateway: GenerationGateway
    max_documents: int = DEFAULT_LIMIT

    def build_context(self, query: str, documents: Iterable[Document]) -> tuple[Retrieval, str]:
        snapshot = tuple(documents)
        retrieval = retrieve(query, snapshot, limit=self.max_documents)
        if retrieval.fallback:
            logger.info(
                "retrieval_fallback",
                extra={"selected": len(retrieval.documents), "query_length": len(query)},
            )
        logger.info(
            "retrieval_complete",
            extra={
                "candidates": len(snapshot),
                "selected": len(retrieval.documents),
                "fallback": retrieval.fallback,
            },
        )
        return retrieval, assemble(retrieval.documents)

    async def answer(
        self,
        query: str,
        documents: Iterable[Document],
        system_instruction: str | None = None,
    ) -> RAGResponse:
        retrieval, context_block = self.build_context(query, documents)
        instruction = system_instruction or BASE_SYSTEM_INSTRUCTION
        result = await self.gateway.generate(query, context_block, instruction)
        if not result.ok:
            return RAGResponse(text=result.text, retrieved_context=[], failed=True)
        return RAGResponse(
            text=result.text,
            retrieved_context=retrieval.titles,
            fallback=retrieval.fallback,
        )
