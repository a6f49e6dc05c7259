"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Repositories return normalized domain entities; raw documents never leave them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from newsecho.domain.entities import Newsletter, Reply, Subscription, UserProfile
    from newsecho.domain.enums import UserRole


class INewsletterRepository(Protocol):
    """Protocol for the newsletters collection."""

    async def get(self, newsletter_id: str) -> Newsletter | None:
        """Return newsletter by id, or None."""

    async def save(self, newsletter: Newsletter) -> Newsletter:
        """Create or overwrite the newsletter document."""

    async def delete(self, newsletter_id: str) -> None:
        """Delete the newsletter document (no-op if missing)."""

    async def list_all(self) -> list[Newsletter]:
        """Return every newsletter, most recently updated first."""

    async def list_published(self) -> list[Newsletter]:
        """Return published newsletters, most recently published first."""


class IUserRepository(Protocol):
    """Protocol for user profile documents (keyed by identity-provider uid)."""

    async def get(self, user_id: str) -> UserProfile | None:
        """Return profile by uid, or None."""

    async def save(self, profile: UserProfile) -> UserProfile:
        """Create or overwrite the profile document."""

    async def update_fields(self, user_id: str, fields: dict) -> bool:
        """Merge raw document fields; False if the profile does not exist."""

    async def delete(self, user_id: str) -> None:
        """Delete the profile document."""

    async def list_all(self) -> list[UserProfile]:
        """Return every profile."""

    async def list_by_role(self, role: UserRole) -> list[UserProfile]:
        """Return profiles with the given role."""


class ISubscriptionRepository(Protocol):
    """Protocol for the canonical user x newsletter subscription relation."""

    async def get(self, user_id: str, newsletter_id: str) -> Subscription | None:
        """Return the subscription, or None."""

    async def add(self, subscription: Subscription) -> bool:
        """Create the subscription; False if it already exists."""

    async def remove(self, user_id: str, newsletter_id: str) -> None:
        """Delete the subscription (no-op if missing)."""

    async def list_for_user(self, user_id: str) -> list[Subscription]:
        """Return the user's subscriptions."""

    async def list_all(self) -> list[Subscription]:
        """Return every subscription."""

    async def count_for_newsletter(self, newsletter_id: str) -> int:
        """Number of subscribers of a newsletter (server-side COUNT)."""

    async def remove_for_newsletter(self, newsletter_id: str) -> int:
        """Delete all subscriptions to a newsletter; return how many were removed."""

    async def remove_for_user(self, user_id: str) -> int:
        """Delete all of a user's subscriptions; return how many were removed."""


class IReplyRepository(Protocol):
    """Protocol for the replies collection."""

    async def get(self, reply_id: str) -> Reply | None:
        """Return reply by id, or None."""

    async def save(self, reply: Reply) -> Reply:
        """Create or overwrite the reply document."""

    async def mark_read(self, reply_id: str) -> bool:
        """Set read=True; False if the reply does not exist."""

    async def list_all(self) -> list[Reply]:
        """Return every reply, newest first."""

    async def list_for_sender(self, sender_id: str) -> list[Reply]:
        """Return replies sent by a user, newest first."""

    async def count_for_newsletter(self, newsletter_id: str) -> int:
        """Number of replies to a newsletter (server-side COUNT)."""
