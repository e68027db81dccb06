from __future__ import annotations

"""CLI utility to ask the knowledge base a question from the terminal."""

import argparse
import asyncio
from pathlib import Path

from omnirag.app.dependencies import get_pipeline, get_pipeline_config
from omnirag.app.settings import settings
from omnirag.knowledge.samples import SAMPLE_DOCUMENTS
from omnirag.knowledge.store import DocumentStore
from omnirag.loaders.ingest import extract_file
from omnirag.rag.pipeline import RAGPipeline


def build_store(paths: list[Path], include_samples: bool) -> DocumentStore:
    """Load sample documents and files into a fresh store."""
    store = DocumentStore()
    if include_samples:
        store.add_documents(SAMPLE_DOCUMENTS)
    for path in paths:
        extracted = extract_file(path.read_bytes(), path.name)
        if not extracted.ok:
            print(f"Could not extract text from {path}; stored placeholder content")
        store.add(title=extracted.title, content=extracted.content, doc_type=extracted.type)
    return store


async def ask(pipeline: RAGPipeline, store: DocumentStore, query: str, instruction: str) -> int:
    response = await pipeline.answer(query, store.snapshot(), system_instruction=instruction)
    print(response.text)
    if response.retrieved_context:
        label = "Context (fallback)" if response.fallback else "Context"
        print(f"\n{label}:")
        for idx, title in enumerate(response.retrieved_context, start=1):
            print(f"  {idx}. {title}")
    return 1 if response.failed else 0


def main(argv: list[str] | None = None) -> int:
    """Answer one question against sample documents and any given files."""
    parser = argparse.ArgumentParser(description="Ask the OmniRAG knowledge base a question.")
    parser.add_argument("query", help="Question to answer.")
    parser.add_argument(
        "--file",
        dest="files",
        action="append",
        type=Path,
        default=[],
        help="Text, Markdown or PDF file to add to the knowledge base. Repeatable.",
    )
    parser.add_argument(
        "--no-samples",
        action="store_true",
        help="Do not load the bundled sample documents.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.max_documents,
        help="Maximum number of documents passed as context.",
    )
    parser.add_argument(
        "--system-instruction",
        default=None,
        help="Override the configured persona prompt.",
    )
    args = parser.parse_args(argv)

    store = build_store(args.files, include_samples=not args.no_samples)
    pipeline = RAGPipeline(gateway=get_pipeline().gateway, max_documents=args.limit)
    instruction = args.system_instruction or get_pipeline_config().system_instruction
    return asyncio.run(ask(pipeline, store, args.query, instruction))


if __name__ == "__main__":
    raise SystemExit(main())
