from __future__ import annotations

"""Keyword and phrase relevance scoring."""

from omnirag.rag.text import normalize, tokenize
from omnirag.rag.types import Document

CONTENT_PHRASE_BONUS = 10
TITLE_PHRASE_BONUS = 20
CONTENT_KEYWORD_BONUS = 1
TITLE_KEYWORD_BONUS = 3


def score(query: str, document: Document) -> int:
    """Score a document against a query using phrase and keyword matches."""
    normalized_query = normalize(query)
    normalized_content = normalize(document.content)
    normalized_title = normalize(document.title)
    keywords = tokenize(normalized_query)

    total = 0
    if normalized_query in normalized_content:
        total += CONTENT_PHRASE_BONUS
    if normalized_query in normalized_title:
        total += TITLE_PHRASE_BONUS
    # Repeated query words count once per occurrence.
    for keyword in keywords:
        if keyword in normalized_content:
            total += CONTENT_KEYWORD_BONUS
        if keyword in normalized_title:
            total += TITLE_KEYWORD_BONUS
    return total
