"""Firestore-backed user profile repository (implements IUserRepository)."""

from __future__ import annotations

from newsecho.domain.entities import UserProfile
from newsecho.domain.enums import UserRole
from newsecho.infrastructure.firebase.collections import COLLECTION_USERS


class FirestoreUserRepository:
    """User profiles keyed by the identity provider's uid."""

    def __init__(self, client) -> None:
        self._coll = client.collection(COLLECTION_USERS)

    async def get(self, user_id: str) -> UserProfile | None:
        """Return profile by uid."""
        doc = await self._coll.document(user_id).get()
        if not doc:
            return None
        return UserProfile.from_document(doc.id, doc.to_dict())

    async def save(self, profile: UserProfile) -> UserProfile:
        await self._coll.document(profile.id).set(profile.to_document())
        return profile

    async def update_fields(self, user_id: str, fields: dict) -> bool:
        """Merge raw document fields (e.g. {"enabled": False}) into the profile."""
        return await self._coll.document(user_id).update(fields)

    async def delete(self, user_id: str) -> None:
        await self._coll.document(user_id).delete()

    async def list_all(self) -> list[UserProfile]:
        return [UserProfile.from_document(doc.id, doc.to_dict()) async for doc in self._coll.stream()]

    async def list_by_role(self, role: UserRole) -> list[UserProfile]:
        q = self._coll.where("role", "==", role.value)
        return [UserProfile.from_document(doc.id, doc.to_dict()) async for doc in q.stream()]
