from __future__ import annotations

"""In-memory knowledge base holding the documents available for retrieval."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable

from omnirag.loaders.ingest import infer_document_type
from omnirag.rag.types import Document, DocumentType


class DocumentNotFoundError(RuntimeError):
    """Raised when a document id is not in the knowledge base."""
    pass


@dataclass
class DocumentStore:
    """Ordered collection of documents keyed by id."""
    documents: list[Document] = field(default_factory=list)

    def add_documents(self, documents: Iterable[Document]) -> int:
        """Store prepared documents, replacing any with the same id."""
        added = 0
        for document in documents:
            self.documents = [doc for doc in self.documents if doc.id != document.id]
            self.documents.append(document)
            added += 1
        return added

    def add(
        self,
        title: str,
        content: str,
        doc_type: DocumentType | None = None,
        upload_date: str | None = None,
    ) -> Document:
        """Create an active document from a title and extracted or pasted content."""
        document = Document(
            id=uuid.uuid4().hex,
            title=title,
            content=content,
            upload_date=upload_date or date.today().isoformat(),
            type=doc_type or infer_document_type(title),
            active=True,
        )
        self.documents.append(document)
        return document

    def get(self, doc_id: str) -> Document:
        for document in self.documents:
            if document.id == doc_id:
                return document
        raise DocumentNotFoundError(doc_id)

    def list_documents(self) -> list[Document]:
        return list(self.documents)

    def snapshot(self) -> tuple[Document, ...]:
        """Return an immutable view for a single retrieval pass."""
        return tuple(self.documents)

    def toggle(self, doc_id: str) -> Document:
        """Flip whether a document participates in retrieval."""
        current = self.get(doc_id)
        updated = replace(current, active=not current.active)
        self.documents = [updated if doc.id == doc_id else doc for doc in self.documents]
        return updated

    def delete(self, doc_id: str) -> Document:
        document = self.get(doc_id)
        self.documents = [doc for doc in self.documents if doc.id != doc_id]
        return document

    def stats(self) -> dict[str, int]:
        """Return document counts for the knowledge base."""
        active = sum(1 for doc in self.documents if doc.active)
        return {
            "document_count": len(self.documents),
            "active_count": active,
            "total_chars": sum(len(doc.content) for doc in self.documents),
        }
