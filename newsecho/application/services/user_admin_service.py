"""Admin user management: list subscribers, enable/disable, delete."""

from __future__ import annotations

from collections import Counter

from newsecho.application.dtos.user_admin import ManagedUser, ManagedUserList
from newsecho.application.interfaces import (
    ICacheService,
    INewsletterRepository,
    IReplyRepository,
    ISubscriptionRepository,
    IUserRepository,
)
from newsecho.application.services.dashboard_service import invalidate_dashboard
from newsecho.domain.entities import UserProfile
from newsecho.domain.enums import UserRole, UserSubscriptionFilter
from newsecho.domain.exceptions import ResourceNotFoundException, ValidationException
from newsecho.shared.telemetry import get_logger

logger = get_logger(__name__)


class UserAdminService:
    def __init__(
        self,
        users: IUserRepository,
        subscriptions: ISubscriptionRepository,
        replies: IReplyRepository,
        newsletters: INewsletterRepository,
        cache: ICacheService | None = None,
    ) -> None:
        self._users = users
        self._subscriptions = subscriptions
        self._replies = replies
        self._newsletters = newsletters
        self._cache = cache

    async def list_users(
        self,
        search: str | None = None,
        subscription_filter: UserSubscriptionFilter = UserSubscriptionFilter.ALL,
    ) -> ManagedUserList:
        """Non-admin users with their subscriptions and reply counts.

        total and subscribed are computed before search/filter are applied.
        """
        profiles = await self._users.list_by_role(UserRole.USER)
        titles = {n.id: n.title for n in await self._newsletters.list_all()}
        subscribed_to: dict[str, list[str]] = {}
        for s in await self._subscriptions.list_all():
            if s.newsletter_id in titles:
                subscribed_to.setdefault(s.user_id, []).append(titles[s.newsletter_id])
        reply_counts = Counter(
            r.sender_id for r in await self._replies.list_all() if r.in_reply_to is None
        )

        managed = [
            ManagedUser(
                profile=p,
                subscribed_newsletters=sorted(subscribed_to.get(p.id, [])),
                reply_count=reply_counts.get(p.id, 0),
            )
            for p in profiles
        ]
        managed.sort(key=lambda m: m.profile.name.lower())
        needle = (search or "").strip().lower()

        def keep(m: ManagedUser) -> bool:
            if needle and needle not in m.profile.name.lower() and needle not in m.profile.email.lower():
                return False
            if subscription_filter == UserSubscriptionFilter.SUBSCRIBED:
                return m.is_subscribed
            if subscription_filter == UserSubscriptionFilter.UNSUBSCRIBED:
                return not m.is_subscribed
            return True

        return ManagedUserList(
            users=[m for m in managed if keep(m)],
            total=len(managed),
            subscribed=sum(1 for m in managed if m.is_subscribed),
        )

    async def _get_managed(self, user_id: str) -> UserProfile:
        profile = await self._users.get(user_id)
        if profile is None:
            raise ResourceNotFoundException("user", user_id)
        if profile.is_admin:
            raise ValidationException("Admin accounts cannot be modified here", field="user_id")
        return profile

    async def set_enabled(self, user_id: str, enabled: bool) -> UserProfile:
        profile = await self._get_managed(user_id)
        await self._users.update_fields(user_id, {"enabled": enabled})
        profile.enabled = enabled
        logger.info("User %s %s", user_id, "enabled" if enabled else "disabled")
        return profile

    async def delete(self, user_id: str) -> None:
        """Delete the profile and its subscriptions. The provider account is left intact."""
        await self._get_managed(user_id)
        removed = await self._subscriptions.remove_for_user(user_id)
        await self._users.delete(user_id)
        await invalidate_dashboard(self._cache)
        logger.info("User %s deleted (%s subscriptions removed)", user_id, removed)
