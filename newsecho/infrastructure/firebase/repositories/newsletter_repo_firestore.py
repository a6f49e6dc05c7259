"""Firestore-backed newsletter repository (implements INewsletterRepository)."""

from __future__ import annotations

from datetime import datetime

from newsecho.domain.entities import Newsletter
from newsecho.domain.enums import NewsletterStatus
from newsecho.infrastructure.firebase.collections import COLLECTION_NEWSLETTERS

_EPOCH_KEY = (0, 0.0)


def _recency(value: datetime | None) -> tuple[int, float]:
    return (1, value.timestamp()) if value is not None else _EPOCH_KEY


class FirestoreNewsletterRepository:
    """Newsletter documents; ordering is done here so documents missing a
    timestamp (legacy writes) are still listed, last."""

    def __init__(self, client) -> None:
        self._coll = client.collection(COLLECTION_NEWSLETTERS)

    async def get(self, newsletter_id: str) -> Newsletter | None:
        doc = await self._coll.document(newsletter_id).get()
        if not doc:
            return None
        return Newsletter.from_document(doc.id, doc.to_dict())

    async def save(self, newsletter: Newsletter) -> Newsletter:
        await self._coll.document(newsletter.id).set(newsletter.to_document())
        return newsletter

    async def delete(self, newsletter_id: str) -> None:
        await self._coll.document(newsletter_id).delete()

    async def list_all(self) -> list[Newsletter]:
        items = [
            Newsletter.from_document(doc.id, doc.to_dict())
            async for doc in self._coll.stream()
        ]
        items.sort(key=lambda n: _recency(n.updated_at), reverse=True)
        return items

    async def list_published(self) -> list[Newsletter]:
        q = self._coll.where("status", "==", NewsletterStatus.PUBLISHED.value)
        items = [Newsletter.from_document(doc.id, doc.to_dict()) async for doc in q.stream()]
        items.sort(key=lambda n: _recency(n.activity_date), reverse=True)
        return items
