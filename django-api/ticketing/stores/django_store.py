"""Django ORM implementation of the DocumentStore.

Uniqueness of document ids is enforced by a database constraint, so a
second create of the same id fails instead of silently duplicating.
"""

from typing import Any

from django.db import DatabaseError, IntegrityError, transaction

from ticketing.models import StoredDocument
from ticketing.stores.interfaces import (
    Document,
    DocumentConflictError,
    DocumentNotFoundError,
    DocumentStore,
    DocumentStoreError,
)


class DjangoDocumentStore(DocumentStore):
    """Database-backed document store using Django ORM."""

    def get_document(self, collection: str, document_id: str) -> Document | None:
        try:
            row = StoredDocument.objects.filter(
                collection=collection, document_id=document_id
            ).first()
        except DatabaseError as exc:
            raise DocumentStoreError(str(exc)) from exc
        return row.as_document() if row else None

    def list_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]:
        queryset = StoredDocument.objects.filter(collection=collection)
        for attribute, value in (filters or {}).items():
            queryset = queryset.filter(**{f"data__{attribute}": value})
        try:
            documents = [row.as_document() for row in queryset]
        except DatabaseError as exc:
            raise DocumentStoreError(str(exc)) from exc
        if order_by:
            documents.sort(key=lambda document: str(document.get(order_by, "")), reverse=descending)
        if limit is not None:
            documents = documents[:limit]
        return documents

    def create_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        try:
            with transaction.atomic():
                row = StoredDocument.objects.create(
                    collection=collection, document_id=document_id, data=data
                )
        except IntegrityError as exc:
            raise DocumentConflictError(collection, document_id) from exc
        except DatabaseError as exc:
            raise DocumentStoreError(str(exc)) from exc
        return row.as_document()

    def update_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        try:
            with transaction.atomic():
                row = (
                    StoredDocument.objects.select_for_update()
                    .filter(collection=collection, document_id=document_id)
                    .first()
                )
                if row is None:
                    raise DocumentNotFoundError(collection, document_id)
                row.data = {**row.data, **data}
                row.save(update_fields=["data", "updated_at"])
        except DatabaseError as exc:
            raise DocumentStoreError(str(exc)) from exc
        return row.as_document()

    def ping(self) -> bool:
        try:
            StoredDocument.objects.exists()
        except DatabaseError:
            return False
        return True
