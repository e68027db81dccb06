from __future__ import annotations

"""Plain text and Markdown extraction."""

from omnirag.loaders.errors import ExtractionError


def extract_text_bytes(data: bytes) -> str:
    """Decode UTF-8 text bytes, passing the content through unchanged."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExtractionError("File is not valid UTF-8 text") from exc
