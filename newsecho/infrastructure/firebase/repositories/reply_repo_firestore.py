"""Firestore-backed reply repository (implements IReplyRepository)."""

from __future__ import annotations

from newsecho.domain.entities import Reply
from newsecho.infrastructure.firebase.collections import COLLECTION_REPLIES


def _newest_first(replies: list[Reply]) -> list[Reply]:
    return sorted(
        replies,
        key=lambda r: (r.timestamp is not None, r.timestamp.timestamp() if r.timestamp else 0.0),
        reverse=True,
    )


class FirestoreReplyRepository:
    def __init__(self, client) -> None:
        self._coll = client.collection(COLLECTION_REPLIES)

    async def get(self, reply_id: str) -> Reply | None:
        doc = await self._coll.document(reply_id).get()
        if not doc:
            return None
        return Reply.from_document(doc.id, doc.to_dict())

    async def save(self, reply: Reply) -> Reply:
        await self._coll.document(reply.id).set(reply.to_document())
        return reply

    async def mark_read(self, reply_id: str) -> bool:
        return await self._coll.document(reply_id).update({"read": True})

    async def list_all(self) -> list[Reply]:
        return _newest_first(
            [Reply.from_document(doc.id, doc.to_dict()) async for doc in self._coll.stream()]
        )

    async def list_for_sender(self, sender_id: str) -> list[Reply]:
        q = self._coll.where("senderId", "==", sender_id)
        return _newest_first([Reply.from_document(doc.id, doc.to_dict()) async for doc in q.stream()])

    async def count_for_newsletter(self, newsletter_id: str) -> int:
        return await self._coll.where("newsletterId", "==", newsletter_id).count()
