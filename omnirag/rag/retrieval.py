from __future__ import annotations

"""Ranking and top-k selection of active documents for a query."""

from datetime import date, datetime, timezone
from typing import Iterable

from omnirag.rag.scoring import score
from omnirag.rag.types import Document, Retrieval, ScoredCandidate

DEFAULT_LIMIT = 5


def recency_key(upload_date: str) -> float:
    """Return the upload date as a UTC timestamp, or 0.0 when it cannot be parsed."""
    value = (upload_date or "").strip()
    if not value:
        return 0.0
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        if len(value) == 10:
            day = date.fromisoformat(value)
            parsed = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
        else:
            parsed = datetime.fromisoformat(value)
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def rank(query: str, documents: Iterable[Document]) -> list[ScoredCandidate]:
    """Score active documents and sort by score, then most recent upload."""
    candidates = [
        ScoredCandidate(
            document=document,
            score=score(query, document),
            recency_key=recency_key(document.upload_date),
        )
        for document in documents
        if document.active
    ]
    candidates.sort(key=lambda item: (item.score, item.recency_key), reverse=True)
    return candidates


def retrieve(query: str, documents: Iterable[Document], limit: int = DEFAULT_LIMIT) -> Retrieval:
    """Select up to ``limit`` documents, stuffing context when nothing matches."""
    snapshot = tuple(documents)
    ranked = rank(query, snapshot)
    if not ranked or limit <= 0:
        return Retrieval(documents=())
    matched = [item.document for item in ranked if item.score > 0][:limit]
    if matched:
        return Retrieval(documents=tuple(matched))
    return Retrieval(
        documents=tuple(item.document for item in ranked[:limit]),
        fallback=True,
    )


def select(query: str, documents: Iterable[Document], limit: int = DEFAULT_LIMIT) -> list[Document]:
    """Return the ordered documents to use as context for ``query``."""
    return list(retrieve(query, documents, limit=limit).documents)
