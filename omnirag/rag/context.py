from __future__ import annotations

"""Context block and prompt rendering for the generation step."""

from typing import Sequence

from omnirag.rag.types import Document

NO_CONTEXT = "CONTEXT: No relevant documents found in knowledge base."
SOURCE_SEPARATOR = "\n\n---\n\n"


def format_source(document: Document) -> str:
    return f"Source: {document.title}\nContent: {document.content}"


def assemble(selected: Sequence[Document]) -> str:
    """Render selected documents into a context block, preserving their order."""
    if not selected:
        return NO_CONTEXT
    return "CONTEXT:\n" + SOURCE_SEPARATOR.join(format_source(document) for document in selected)


def build_prompt(query: str, context_block: str) -> str:
    """Combine the context block and user query into the final prompt."""
    return f"\n{context_block}\n\nUSER QUERY: {query}\n\nRESPONSE:\n"
