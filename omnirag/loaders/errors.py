from __future__ import annotations


class ExtractionError(RuntimeError):
    """Raised when a file cannot be turned into text."""
    pass
