from __future__ import annotations

"""PDF text extraction with page markers."""

from omnirag.loaders.errors import ExtractionError

MAX_PDF_PAGES = 50


def _join_page_words(text: str) -> str:
    return " ".join(text.split())


def extract_pdf_bytes(data: bytes, max_pages: int = MAX_PDF_PAGES) -> str:
    """Extract text from the first ``max_pages`` pages, each prefixed with a page marker."""
    try:
        import fitz
    except ImportError as exc:
        raise ExtractionError("PyMuPDF is required to load PDF files") from exc

    try:
        reader = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise ExtractionError(f"Failed to parse PDF: {exc}") from exc
    with reader:
        page_count = min(reader.page_count, max_pages)
        parts: list[str] = []
        try:
            for index in range(page_count):
                page_text = _join_page_words(reader.load_page(index).get_text() or "")
                parts.append(f"--- Page {index + 1} ---\n{page_text}\n\n")
        except Exception as exc:
            raise ExtractionError(f"Failed to read PDF page {len(parts) + 1}: {exc}") from exc
    return "".join(parts)
