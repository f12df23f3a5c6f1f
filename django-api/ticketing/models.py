"""Django ORM models (persistence layer).

These models handle database concerns for the self-hosted document store.
Domain logic lives in domain/models.py.
"""

from django.db import models


class StoredDocument(models.Model):
    """One document of a named collection, attributes kept as JSON."""

    collection = models.CharField(max_length=64)
    document_id = models.CharField(max_length=36)
    data = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["collection", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["collection", "document_id"],
                name="unique_document_per_collection",
            ),
        ]
        indexes = [
            models.Index(
                fields=["collection", "created_at"], name="ticketing_doc_collection_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.collection}/{self.document_id}"

    def as_document(self) -> dict:
        return {**self.data, "$id": self.document_id}
