from __future__ import annotations

"""Text normalization and keyword tokenization used by the scorer."""

import re

_NON_WORD_RE = re.compile(r"[^\w\s]")
MIN_TOKEN_LENGTH = 2


def normalize(text: str) -> str:
    """Lowercase text and drop every character that is not a word character or whitespace."""
    return _NON_WORD_RE.sub("", text.lower())


def tokenize(normalized: str) -> list[str]:
    """Split normalized text on whitespace, keeping tokens of two or more characters.

    Order and duplicates are preserved; short acronyms such as "hr" survive.
    """
    return [token for token in normalized.split() if len(token) >= MIN_TOKEN_LENGTH]
