"""Firestore REST v1 client (no firebase-admin).

Service-account tokens come from google-auth; every request goes through one
httpx.AsyncClient. Repositories only use the small surface below
(collection / document / where / order_by / count / stream), which the
in-memory store in newsecho.infrastructure.memory mirrors.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import httpx

from newsecho.infrastructure.firebase._rest_encoding import (
    decode_fields,
    decode_value,
    encode_document,
    encode_value,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_LIST_PAGE_SIZE = 300


def _get_credentials(key_dict: dict):
    """Service account credentials scoped for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class DocumentExistsError(Exception):
    """createDocument was called with an id that is already taken."""


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array-contains": "ARRAY_CONTAINS",
    "array_contains": "ARRAY_CONTAINS",
}

_DIRECTIONS = {
    "ASCENDING": "ASCENDING",
    "DESCENDING": "DESCENDING",
    "asc": "ASCENDING",
    "desc": "DESCENDING",
}


def _snapshot(document: dict) -> DocumentSnapshot:
    return DocumentSnapshot(
        document.get("name", "").rsplit("/", 1)[-1],
        decode_fields(document.get("fields")),
    )


def _results(payload: Any) -> list[dict]:
    # runQuery / runAggregationQuery answer with a JSON array of partial results
    if isinstance(payload, list):
        return payload
    return [payload] if payload else []


class DocumentSnapshot:
    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    async def get(self) -> DocumentSnapshot | None:
        found = await self._client.call("GET", self._path)
        if not found:
            return None
        return DocumentSnapshot(self.id, decode_fields(found.get("fields")))

    async def set(self, data: dict[str, Any]) -> None:
        """Write the whole document, creating it if needed."""
        await self._client.call("PATCH", self._path, body=encode_document(data))

    async def update(self, data: dict[str, Any]) -> bool:
        """Patch only the given top-level fields of an existing document.

        Returns False (and writes nothing) when the document is missing.
        """
        params = [("updateMask.fieldPaths", f"`{name}`") for name in data]
        params.append(("currentDocument.exists", "true"))
        found = await self._client.call(
            "PATCH", self._path, body=encode_document(data), params=params
        )
        return found is not None

    async def delete(self) -> None:
        """Delete the document; deleting a missing document is not an error."""
        await self._client.call("DELETE", self._path)


class _Query:
    """Filters plus an optional ordering, run with runQuery or runAggregationQuery."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._parent, _, self._collection_id = path.rpartition("/")
        self._filters: list[tuple[str, str, Any]] = []
        self._order: tuple[str, str] | None = None
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> _Query:
        if op not in _OP_MAP:
            raise ValueError(f"Unsupported query operator: {op!r}")
        self._filters.append((field, op, value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        self._order = (field, _DIRECTIONS[direction])
        return self

    def limit(self, n: int) -> _Query:
        self._limit = n
        return self

    def _filter(self) -> dict[str, Any] | None:
        conditions = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": _OP_MAP[op],
                    "value": encode_value(value),
                }
            }
            for field, op, value in self._filters
        ]
        if len(conditions) > 1:
            return {"compositeFilter": {"op": "AND", "filters": conditions}}
        return conditions[0] if conditions else None

    def _structured_query(self, *, for_count: bool = False) -> dict[str, Any]:
        query: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}
        condition = self._filter()
        if condition is not None:
            query["where"] = condition
        if for_count:
            return query
        if self._order is not None:
            field, direction = self._order
            query["orderBy"] = [{"field": {"fieldPath": field}, "direction": direction}]
        if self._limit:
            query["limit"] = self._limit
        return query

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        payload = await self._client.call(
            "POST",
            f"{self._parent}:runQuery",
            body={"structuredQuery": self._structured_query()},
        )
        for item in _results(payload):
            if "document" in item:
                yield _snapshot(item["document"])

    async def count(self) -> int:
        """COUNT aggregation evaluated by Firestore; ordering and limit are ignored."""
        payload = await self._client.call(
            "POST",
            f"{self._parent}:runAggregationQuery",
            body={
                "structuredAggregationQuery": {
                    "structuredQuery": self._structured_query(for_count=True),
                    "aggregations": [{"alias": "total", "count": {}}],
                }
            },
        )
        for item in _results(payload):
            total = item.get("result", {}).get("aggregateFields", {}).get("total")
            if total is not None:
                return int(decode_value(total) or 0)
        return 0


class CollectionReference:
    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document under a chosen id; DocumentExistsError if it is taken."""
        await self._client.call(
            "POST",
            self._path,
            body=encode_document(data),
            params=[("documentId", document_id)],
        )

    def where(self, field: str, op: str, value: Any) -> _Query:
        return _Query(self._client, self._path).where(field, op, value)

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        return _Query(self._client, self._path).order_by(field, direction)

    async def count(self) -> int:
        return await _Query(self._client, self._path).count()

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Every document in the collection, one listDocuments page at a time."""
        page_token: str | None = None
        while True:
            params = [("pageSize", str(_LIST_PAGE_SIZE))]
            if page_token:
                params.append(("pageToken", page_token))
            page = await self._client.call("GET", self._path, params=params)
            if not page:
                return
            for document in page.get("documents", []):
                yield _snapshot(document)
            page_token = page.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Entry point: ``client.collection("newsletters").document(id)``."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client unless it was injected."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        # google-auth refreshes synchronously
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def call(
        self,
        method: str,
        path: str,
        *,
        body: dict | None = None,
        params: list[tuple[str, str]] | None = None,
    ) -> Any:
        """Send one authorized request under /v1/<path>.

        404 maps to None and 409 to DocumentExistsError; any other error
        status raises httpx.HTTPStatusError.
        """
        response = await self._http.request(
            method,
            f"{_BASE}/{path}",
            headers={"Authorization": f"Bearer {await self.get_token()}"},
            json=body,
            params=params,
        )
        if response.status_code == 404:
            return None
        if response.status_code == 409:
            raise DocumentExistsError(path)
        response.raise_for_status()
        if method == "DELETE" or not response.content:
            return {}
        return response.json()

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
