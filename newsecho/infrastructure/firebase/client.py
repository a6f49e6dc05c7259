"""Firestore client (REST-based, no firebase-admin).

Initialized at app startup from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON
string) or FIREBASE_SERVICE_ACCOUNT_PATH (file path). When the memory backend
is selected, an in-process store with the same surface is used instead.
"""

import json
import logging
from pathlib import Path

from newsecho.core.config import get_settings
from newsecho.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from newsecho.infrastructure.memory.store import InMemoryDocumentStore

logger = logging.getLogger(__name__)

_document_store: FirestoreRESTClient | InMemoryDocumentStore | None = None


def _load_key_dict() -> dict | None:
    """Return service account dict from env key or file path."""
    settings = get_settings()
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def init_firebase() -> bool:
    """Initialize the document store for the configured backend.

    Memory backend: creates an empty in-process store. Firestore backend: uses
    the service account key (or path) to build a REST client. Idempotent if
    already initialized. On malformed credentials logs the exception and
    returns False so the app can start and report 503 on store access.

    Returns:
        True if a store is available, False otherwise.
    """
    global _document_store
    if _document_store is not None:
        return True
    settings = get_settings()
    if settings.database_backend == "memory":
        _document_store = InMemoryDocumentStore()
        logger.info("Using in-memory document store")
        return True
    try:
        key_dict = _load_key_dict()
        if not key_dict:
            return False

        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return False

        cred = _get_credentials(key_dict)
        _document_store = FirestoreRESTClient(project_id, cred)
        logger.info("Firestore REST client initialized for project %s", project_id)
        return True
    except Exception:
        logger.exception("Firebase initialization failed")
        return False


def get_firestore_client() -> FirestoreRESTClient | InMemoryDocumentStore | None:
    """Return the document store, or None if not configured.

    Operations used by the repositories (all async):
    - await db.collection(name).document(id).set(data) / update(data) / get() / delete()
    - db.collection(name).where(...).order_by(...).limit(n).stream() / count()
    - async for doc in db.collection(name).stream()
    """
    return _document_store


async def close_firebase() -> None:
    """Close the store's HTTP connection pool. Call from app shutdown."""
    global _document_store
    if _document_store is not None:
        await _document_store.aclose()
        _document_store = None
        logger.info("Document store closed")
