"""In-memory DocumentStore for development and tests."""

import copy
import threading
from typing import Any

from ticketing.stores.interfaces import (
    Document,
    DocumentConflictError,
    DocumentNotFoundError,
    DocumentStore,
)


class InMemoryDocumentStore(DocumentStore):
    """Simple dict-backed document store. Safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.collections: dict[str, dict[str, Document]] = {}

    def reset(self) -> None:
        with self._lock:
            self.collections.clear()

    def get_document(self, collection: str, document_id: str) -> Document | None:
        with self._lock:
            document = self.collections.get(collection, {}).get(document_id)
            return copy.deepcopy(document) if document is not None else None

    def list_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]:
        with self._lock:
            documents = [
                copy.deepcopy(document)
                for document in self.collections.get(collection, {}).values()
                if all(document.get(key) == value for key, value in (filters or {}).items())
            ]
        if order_by:
            documents.sort(key=lambda document: str(document.get(order_by, "")), reverse=descending)
        if limit is not None:
            documents = documents[:limit]
        return documents

    def create_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        with self._lock:
            documents = self.collections.setdefault(collection, {})
            if document_id in documents:
                raise DocumentConflictError(collection, document_id)
            document = {**copy.deepcopy(data), "$id": document_id}
            documents[document_id] = document
            return copy.deepcopy(document)

    def update_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        with self._lock:
            document = self.collections.get(collection, {}).get(document_id)
            if document is None:
                raise DocumentNotFoundError(collection, document_id)
            document.update(copy.deepcopy(data))
            return copy.deepcopy(document)

    def ping(self) -> bool:
        return True
