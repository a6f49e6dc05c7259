"""Firestore-backed subscription repository (implements ISubscriptionRepository).

One document per user x newsletter pair in the top-level subscriptions
collection, keyed by subscription_id(user_id, newsletter_id).
"""

from __future__ import annotations

import logging

from newsecho.domain.entities import Subscription, subscription_id
from newsecho.infrastructure.firebase._rest_client import DocumentExistsError
from newsecho.infrastructure.firebase.collections import COLLECTION_SUBSCRIPTIONS

logger = logging.getLogger(__name__)


class FirestoreSubscriptionRepository:
    def __init__(self, client) -> None:
        self._coll = client.collection(COLLECTION_SUBSCRIPTIONS)

    async def get(self, user_id: str, newsletter_id: str) -> Subscription | None:
        doc = await self._coll.document(subscription_id(user_id, newsletter_id)).get()
        if not doc:
            return None
        return Subscription.from_document(doc.to_dict())

    async def add(self, subscription: Subscription) -> bool:
        """Create the subscription document; False if the pair already exists."""
        try:
            await self._coll.create(subscription.id, subscription.to_document())
        except DocumentExistsError:
            return False
        return True

    async def remove(self, user_id: str, newsletter_id: str) -> None:
        await self._coll.document(subscription_id(user_id, newsletter_id)).delete()

    async def list_for_user(self, user_id: str) -> list[Subscription]:
        q = self._coll.where("userId", "==", user_id)
        return [Subscription.from_document(doc.to_dict()) async for doc in q.stream()]

    async def list_all(self) -> list[Subscription]:
        return [Subscription.from_document(doc.to_dict()) async for doc in self._coll.stream()]

    async def count_for_newsletter(self, newsletter_id: str) -> int:
        return await self._coll.where("newsletterId", "==", newsletter_id).count()

    async def _remove_where(self, field: str, value: str) -> int:
        ids = [doc.id async for doc in self._coll.where(field, "==", value).stream()]
        for doc_id in ids:
            await self._coll.document(doc_id).delete()
        if ids:
            logger.info("Removed %s subscriptions where %s=%s", len(ids), field, value)
        return len(ids)

    async def remove_for_newsletter(self, newsletter_id: str) -> int:
        return await self._remove_where("newsletterId", newsletter_id)

    async def remove_for_user(self, user_id: str) -> int:
        return await self._remove_where("userId", user_id)
