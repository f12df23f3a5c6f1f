"""Appwrite databases REST client implementing the DocumentStore."""

import json
import logging
from typing import Any

import requests

from ticketing.stores.interfaces import (
    Document,
    DocumentConflictError,
    DocumentNotFoundError,
    DocumentStore,
    DocumentStoreError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


def _query(method: str, attribute: str | None = None, values: list[Any] | None = None) -> str:
    query: dict[str, Any] = {"method": method}
    if attribute is not None:
        query["attribute"] = attribute
    if values is not None:
        query["values"] = values
    return json.dumps(query)


class AppwriteDocumentStore(DocumentStore):
    """Talks to one Appwrite database over its REST API."""

    def __init__(
        self,
        endpoint: str,
        project_id: str,
        database_id: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._database_id = database_id
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "X-Appwrite-Project": project_id,
            }
        )
        if api_key:
            self._session.headers["X-Appwrite-Key"] = api_key

    def _documents_url(self, collection: str, document_id: str | None = None) -> str:
        url = f"{self._endpoint}/databases/{self._database_id}/collections/{collection}/documents"
        return f"{url}/{document_id}" if document_id else url

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("Document store request failed: %s %s: %s", method, url, exc)
            raise DocumentStoreError(f"{method} {url} failed: {exc}") from exc

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        if response.status_code >= 400:
            raise DocumentStoreError(
                f"Document store answered {response.status_code}: {response.text[:200]}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise DocumentStoreError("Document store returned a non-JSON body") from exc
        if not isinstance(body, dict):
            raise DocumentStoreError("Document store returned an unexpected body")
        return body

    def get_document(self, collection: str, document_id: str) -> Document | None:
        response = self._request("GET", self._documents_url(collection, document_id))
        if response.status_code == 404:
            return None
        return self._json(response)

    def list_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]:
        queries = [
            _query("equal", attribute, [value]) for attribute, value in (filters or {}).items()
        ]
        if order_by:
            queries.append(_query("orderDesc" if descending else "orderAsc", order_by))
        if limit is not None:
            queries.append(_query("limit", values=[limit]))

        response = self._request(
            "GET", self._documents_url(collection), params={"queries[]": queries}
        )
        documents = self._json(response).get("documents")
        if not isinstance(documents, list):
            raise DocumentStoreError("Document list response has no documents")
        return documents

    def create_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        response = self._request(
            "POST",
            self._documents_url(collection),
            json={"documentId": document_id, "data": data},
        )
        if response.status_code == 409:
            raise DocumentConflictError(collection, document_id)
        return self._json(response)

    def update_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> Document:
        response = self._request(
            "PATCH", self._documents_url(collection, document_id), json={"data": data}
        )
        if response.status_code == 404:
            raise DocumentNotFoundError(collection, document_id)
        return self._json(response)

    def ping(self) -> bool:
        try:
            response = self._request("GET", f"{self._endpoint}/health/version")
        except DocumentStoreError:
            return False
        return response.status_code < 500
