"""In-memory document store with the same async surface as FirestoreRESTClient.

Used for local development and tests. Documents are deep-copied on write and
read so callers never share mutable state with the store. Operations never
await while touching the dicts. Query semantics
follow Firestore: ordering by a field excludes documents that lack it, and
range comparisons between values of different types never match.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any

from newsecho.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    DocumentSnapshot,
    _OP_MAP,
)

_MISSING = object()


def _comparable(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool)
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return True
    if isinstance(a, datetime) and isinstance(b, datetime):
        return True
    return type(a) is type(b)


def _matches(value: Any, op: str, expected: Any) -> bool:
    if op == "==":
        return value is not _MISSING and value == expected
    if op == "!=":
        return value is not _MISSING and value is not None and value != expected
    if op == "in":
        return value is not _MISSING and value in expected
    if op == "not-in":
        return value is not _MISSING and value is not None and value not in expected
    if op in ("array-contains", "array_contains"):
        return isinstance(value, list) and expected in value
    if value is _MISSING or value is None or not _comparable(value, expected):
        return False
    if op == "<":
        return value < expected
    if op == "<=":
        return value <= expected
    if op == ">":
        return value > expected
    if op == ">=":
        return value >= expected
    raise ValueError(f"Unsupported query operator: {op!r}")


def _sort_key(value: Any) -> tuple:
    # Firestore type order: null < bool < number < timestamp < string < other
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (1, value)
    if isinstance(value, (int, float)):
        return (2, value)
    if isinstance(value, datetime):
        return (3, value.timestamp())
    if isinstance(value, str):
        return (4, value)
    return (5, str(value))


class _MemoryDocumentReference:
    def __init__(self, store: "InMemoryDocumentStore", collection_id: str, document_id: str):
        self._store = store
        self._collection_id = collection_id
        self.id = document_id

    @property
    def _docs(self) -> dict[str, dict]:
        return self._store._collections.setdefault(self._collection_id, {})

    async def get(self) -> DocumentSnapshot | None:
        data = self._docs.get(self.id)
        if data is None:
            return None
        return DocumentSnapshot(self.id, copy.deepcopy(data))

    async def set(self, data: dict[str, Any]) -> None:
        self._docs[self.id] = copy.deepcopy(data)

    async def update(self, data: dict[str, Any]) -> bool:
        existing = self._docs.get(self.id)
        if existing is None:
            return False
        existing.update(copy.deepcopy(data))
        return True

    async def delete(self) -> None:
        self._docs.pop(self.id, None)


class _MemoryQuery:
    def __init__(self, store: "InMemoryDocumentStore", collection_id: str):
        self._store = store
        self._collection_id = collection_id
        self._filters: list[tuple[str, str, Any]] = []
        self._order_by_field: str | None = None
        self._descending = False
        self._offset = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> "_MemoryQuery":
        if op not in _OP_MAP:
            raise ValueError(f"Unsupported query operator: {op!r}")
        self._filters.append((field, op, value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_MemoryQuery":
        self._order_by_field = field
        self._descending = direction in ("DESCENDING", "desc")
        return self

    def offset(self, n: int) -> "_MemoryQuery":
        self._offset = n
        return self

    def limit(self, n: int) -> "_MemoryQuery":
        self._limit = n
        return self

    async def _run(self, paged: bool = True) -> list[tuple[str, dict]]:
        docs = list(self._store._collections.get(self._collection_id, {}).items())
        rows = [
            (doc_id, copy.deepcopy(data))
            for doc_id, data in docs
            if all(_matches(data.get(f, _MISSING), op, v) for f, op, v in self._filters)
        ]
        if self._order_by_field is not None:
            field = self._order_by_field
            rows = [r for r in rows if field in r[1]]
            rows.sort(key=lambda r: _sort_key(r[1][field]), reverse=self._descending)
        if paged:
            rows = rows[self._offset:]
            if self._limit:
                rows = rows[: self._limit]
        return rows

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        for doc_id, data in await self._run():
            yield DocumentSnapshot(doc_id, data)

    async def count(self) -> int:
        return len(await self._run(paged=False))


class _MemoryCollectionReference:
    def __init__(self, store: "InMemoryDocumentStore", collection_id: str):
        self._store = store
        self._collection_id = collection_id

    def document(self, document_id: str) -> _MemoryDocumentReference:
        return _MemoryDocumentReference(self._store, self._collection_id, document_id)

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        docs = self._store._collections.setdefault(self._collection_id, {})
        if document_id in docs:
            raise DocumentExistsError("Document already exists")
        docs[document_id] = copy.deepcopy(data)

    def where(self, field: str, op: str, value: Any) -> _MemoryQuery:
        return _MemoryQuery(self._store, self._collection_id).where(field, op, value)

    def order_by(self, field: str, direction: str = "ASCENDING") -> _MemoryQuery:
        return _MemoryQuery(self._store, self._collection_id).order_by(field, direction)

    async def count(self) -> int:
        return await _MemoryQuery(self._store, self._collection_id).count()

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        async for snapshot in _MemoryQuery(self._store, self._collection_id).stream():
            yield snapshot


class InMemoryDocumentStore:
    """Process-local stand-in for FirestoreRESTClient."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict]] = {}

    def collection(self, collection_id: str) -> _MemoryCollectionReference:
        return _MemoryCollectionReference(self, collection_id)

    def clear(self) -> None:
        self._collections.clear()

    async def aclose(self) -> None:
        return None
