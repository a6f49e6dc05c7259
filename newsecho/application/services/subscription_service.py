"""Subscribe / unsubscribe with a server-enforced unsubscribe cooldown."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import datetime, timedelta

from newsecho.application.dtos.newsletter import SubscriptionView
from newsecho.application.interfaces import (
    ICacheService,
    INewsletterRepository,
    ISubscriptionRepository,
)
from newsecho.application.services.dashboard_service import invalidate_dashboard
from newsecho.domain.entities import Subscription
from newsecho.domain.exceptions import (
    AlreadySubscribedException,
    NotSubscribedException,
    ResourceNotFoundException,
    SubscriptionCooldownException,
)
from newsecho.domain.policies import remaining_cooldown
from newsecho.shared.telemetry import get_logger, traced
from newsecho.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def subscription_state(
    subscription: Subscription | None, now: datetime, cooldown: timedelta
) -> tuple[bool, bool, int]:
    """(is_subscribed, can_unsubscribe, cooldown_remaining_seconds) for one user x newsletter."""
    if subscription is None:
        return False, False, 0
    remaining = remaining_cooldown(subscription.subscribed_at, now, cooldown)
    seconds = math.ceil(remaining.total_seconds())
    return True, seconds == 0, seconds


class SubscriptionService:
    def __init__(
        self,
        newsletters: INewsletterRepository,
        subscriptions: ISubscriptionRepository,
        cache: ICacheService | None = None,
        *,
        cooldown_hours: int = 24,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._newsletters = newsletters
        self._subscriptions = subscriptions
        self._cache = cache
        self._cooldown_hours = cooldown_hours
        self._cooldown = timedelta(hours=cooldown_hours)
        self._clock = clock

    @property
    def cooldown(self) -> timedelta:
        return self._cooldown

    @traced("subscriptions.subscribe")
    async def subscribe(self, user_id: str, newsletter_id: str) -> Subscription:
        """Subscribe to a published newsletter.

        Raises:
            ResourceNotFoundException: Newsletter missing or not published.
            AlreadySubscribedException: The pair already exists.
        """
        newsletter = await self._newsletters.get(newsletter_id)
        if newsletter is None or not newsletter.is_published:
            raise ResourceNotFoundException("newsletter", newsletter_id)
        subscription = Subscription(
            user_id=user_id, newsletter_id=newsletter_id, subscribed_at=self._clock()
        )
        if not await self._subscriptions.add(subscription):
            raise AlreadySubscribedException(newsletter_id)
        await invalidate_dashboard(self._cache)
        logger.info("User %s subscribed to %s", user_id, newsletter_id)
        return subscription

    @traced("subscriptions.unsubscribe")
    async def unsubscribe(self, user_id: str, newsletter_id: str) -> None:
        """Remove a subscription once the cooldown since subscribing has elapsed.

        Raises:
            NotSubscribedException: No such subscription.
            SubscriptionCooldownException: Cooldown still running (carries remaining seconds).
        """
        subscription = await self._subscriptions.get(user_id, newsletter_id)
        _, allowed, remaining = subscription_state(subscription, self._clock(), self._cooldown)
        if subscription is None:
            raise NotSubscribedException(newsletter_id)
        if not allowed:
            raise SubscriptionCooldownException(newsletter_id, self._cooldown_hours, remaining)
        await self._subscriptions.remove(user_id, newsletter_id)
        await invalidate_dashboard(self._cache)
        logger.info("User %s unsubscribed from %s", user_id, newsletter_id)

    async def list_for_user(self, user_id: str) -> list[SubscriptionView]:
        """The user's subscriptions joined with their newsletters, newest first.

        Subscriptions whose newsletter was deleted are skipped.
        """
        now = self._clock()
        views: list[SubscriptionView] = []
        for subscription in await self._subscriptions.list_for_user(user_id):
            newsletter = await self._newsletters.get(subscription.newsletter_id)
            if newsletter is None:
                logger.debug("Skipping dangling subscription %s", subscription.id)
                continue
            _, allowed, remaining = subscription_state(subscription, now, self._cooldown)
            views.append(
                SubscriptionView(
                    newsletter=newsletter,
                    subscribed_at=subscription.subscribed_at,
                    can_unsubscribe=allowed,
                    cooldown_remaining_seconds=remaining,
                )
            )
        views.sort(
            key=lambda v: v.subscribed_at.timestamp() if v.subscribed_at else 0.0,
            reverse=True,
        )
        return views
