from __future__ import annotations

"""Dispatch uploaded files to the matching extractor."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from omnirag.loaders.pdf import extract_pdf_bytes
from omnirag.loaders.text import extract_text_bytes
from omnirag.rag.types import DocumentType

logger = logging.getLogger(__name__)

EXTRACTION_FAILED_CONTENT = "Error reading file. Please try copy-pasting the content."
PDF_CONTENT_TYPE = "application/pdf"
TEXT_SUFFIXES = {".txt", ".text", ".md", ".markdown", ".json", ".csv", ".log"}

DocumentExtractor = Callable[[bytes], str]


@dataclass(frozen=True)
class ExtractedFile:
    """Text pulled out of an uploaded file plus the title and type it implies."""
    title: str
    content: str
    type: DocumentType
    ok: bool = True


def infer_document_type(title: str) -> DocumentType:
    """Infer a document type from a title or filename suffix."""
    suffix = Path(title.strip().lower()).suffix
    if suffix == ".pdf":
        return DocumentType.PDF
    if suffix in {".md", ".markdown"}:
        return DocumentType.MARKDOWN
    return DocumentType.TEXT


def _is_pdf(filename: str, content_type: str | None) -> bool:
    if content_type and content_type.split(";", 1)[0].strip().lower() == PDF_CONTENT_TYPE:
        return True
    return Path(filename.lower()).suffix == ".pdf"


def resolve_extractor(filename: str, content_type: str | None = None) -> DocumentExtractor:
    """Pick the extractor for a file based on its content type and suffix."""
    if _is_pdf(filename, content_type):
        return extract_pdf_bytes
    suffix = Path(filename.lower()).suffix
    if suffix and suffix not in TEXT_SUFFIXES and not (content_type or "").startswith("text/"):
        logger.info("extractor_text_fallback", extra={"suffix": suffix})
    return extract_text_bytes


def extract_file(
    data: bytes,
    filename: str,
    content_type: str | None = None,
    extractor: DocumentExtractor | None = None,
) -> ExtractedFile:
    """Extract text from an uploaded file, replacing failures with a placeholder."""
    doc_type = DocumentType.PDF if _is_pdf(filename, content_type) else infer_document_type(filename)
    run = extractor or resolve_extractor(filename, content_type)
    try:
        content = run(data)
    except Exception as exc:
        logger.error(
            "file_extraction_failed",
            extra={
                "source_name": filename,
                "error_type": type(exc).__name__,
                "detail": str(exc),
            },
        )
        return ExtractedFile(
            title=filename,
            content=EXTRACTION_FAILED_CONTENT,
            type=doc_type,
            ok=False,
        )
    return ExtractedFile(title=filename, content=content, type=doc_type)
