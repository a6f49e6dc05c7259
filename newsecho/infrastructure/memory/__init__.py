"""In-process document store and identity provider (DATABASE_BACKEND / AUTH_BACKEND=memory)."""

from newsecho.infrastructure.memory.identity import InMemoryIdentityProvider, OutboxMessage
from newsecho.infrastructure.memory.store import InMemoryDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "InMemoryIdentityProvider",
    "OutboxMessage",
]
