"""Newsletter authoring (admin) and browsing (subscribers)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta

from newsecho.application.dtos.newsletter import NewsletterView, SubscriberNewsletterView
from newsecho.application.interfaces import (
    ICacheService,
    INewsletterRepository,
    IReplyRepository,
    ISubscriptionRepository,
)
from newsecho.application.services.dashboard_service import invalidate_dashboard
from newsecho.application.services.subscription_service import subscription_state
from newsecho.domain.entities import Newsletter, NewsletterCounts, NewsletterDraft
from newsecho.domain.entities.newsletter import DEFAULT_AUTHOR, DEFAULT_CATEGORY
from newsecho.domain.enums import NewsletterStatus, NewsletterStatusFilter
from newsecho.domain.exceptions import ResourceNotFoundException
from newsecho.shared.telemetry import get_logger, traced
from newsecho.shared.utils import InputSanitizer, generate_cuid
from newsecho.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def _clean(value: str | None) -> str:
    return InputSanitizer.sanitize_text(value or "").strip()


class NewsletterService:
    def __init__(
        self,
        newsletters: INewsletterRepository,
        subscriptions: ISubscriptionRepository,
        replies: IReplyRepository,
        cache: ICacheService | None = None,
        *,
        cooldown_hours: int = 24,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._newsletters = newsletters
        self._subscriptions = subscriptions
        self._replies = replies
        self._cache = cache
        self._cooldown = timedelta(hours=cooldown_hours)
        self._clock = clock

    async def counts(self, newsletter_id: str) -> NewsletterCounts:
        subscribers, replies = await asyncio.gather(
            self._subscriptions.count_for_newsletter(newsletter_id),
            self._replies.count_for_newsletter(newsletter_id),
        )
        return NewsletterCounts(subscribers=subscribers, replies=replies)

    async def to_view(self, newsletter: Newsletter) -> NewsletterView:
        return NewsletterView(newsletter=newsletter, counts=await self.counts(newsletter.id))

    def _apply(self, newsletter: Newsletter, draft: NewsletterDraft, now: datetime) -> None:
        newsletter.title = _clean(draft.title)
        newsletter.content = InputSanitizer.sanitize_rich_text((draft.content or "").strip())
        newsletter.category = _clean(draft.category) or DEFAULT_CATEGORY
        newsletter.author = _clean(draft.author) or DEFAULT_AUTHOR
        newsletter.image_url = (draft.image_url or "").strip() or None
        newsletter.status = draft.status
        if draft.status == NewsletterStatus.PUBLISHED:
            newsletter.published_at = newsletter.published_at or now
        else:
            newsletter.published_at = None
        newsletter.updated_at = now

    @traced("newsletters.create")
    async def create(self, draft: NewsletterDraft) -> NewsletterView:
        """Create a draft or published newsletter.

        Raises:
            ValidationException: Title or content blank (nothing is written).
        """
        now = self._clock()
        newsletter = Newsletter(id=generate_cuid(), title="", content="", created_at=now)
        self._apply(newsletter, draft, now)
        newsletter.validate()
        await self._newsletters.save(newsletter)
        await invalidate_dashboard(self._cache)
        logger.info("Newsletter %s created (%s)", newsletter.id, newsletter.status.value)
        return NewsletterView(newsletter=newsletter, counts=NewsletterCounts())

    async def get(self, newsletter_id: str) -> NewsletterView:
        newsletter = await self._newsletters.get(newsletter_id)
        if newsletter is None:
            raise ResourceNotFoundException("newsletter", newsletter_id)
        return await self.to_view(newsletter)

    @traced("newsletters.update")
    async def update(self, newsletter_id: str, draft: NewsletterDraft) -> NewsletterView:
        newsletter = await self._newsletters.get(newsletter_id)
        if newsletter is None:
            raise ResourceNotFoundException("newsletter", newsletter_id)
        self._apply(newsletter, draft, self._clock())
        newsletter.validate()
        await self._newsletters.save(newsletter)
        await invalidate_dashboard(self._cache)
        logger.info("Newsletter %s updated (%s)", newsletter.id, newsletter.status.value)
        return await self.to_view(newsletter)

    @traced("newsletters.delete")
    async def delete(self, newsletter_id: str) -> None:
        """Delete a newsletter and its subscriptions. Replies are kept for the inbox."""
        newsletter = await self._newsletters.get(newsletter_id)
        if newsletter is None:
            raise ResourceNotFoundException("newsletter", newsletter_id)
        await self._newsletters.delete(newsletter_id)
        removed = await self._subscriptions.remove_for_newsletter(newsletter_id)
        await invalidate_dashboard(self._cache)
        logger.info("Newsletter %s deleted (%s subscriptions removed)", newsletter_id, removed)

    async def list_admin(
        self,
        search: str | None = None,
        status: NewsletterStatusFilter = NewsletterStatusFilter.ALL,
    ) -> list[NewsletterView]:
        """All newsletters, most recently updated first, filtered by title and status."""
        needle = (search or "").strip().lower()
        items = [
            n
            for n in await self._newsletters.list_all()
            if (not needle or needle in n.title.lower())
            and (status == NewsletterStatusFilter.ALL or n.status.value == status.value)
        ]
        return list(await asyncio.gather(*(self.to_view(n) for n in items)))

    async def _subscriber_view(
        self, newsletter: Newsletter, user_id: str, now: datetime
    ) -> SubscriberNewsletterView:
        counts, subscription = await asyncio.gather(
            self.counts(newsletter.id),
            self._subscriptions.get(user_id, newsletter.id),
        )
        subscribed, allowed, remaining = subscription_state(subscription, now, self._cooldown)
        return SubscriberNewsletterView(
            newsletter=newsletter,
            counts=counts,
            is_subscribed=subscribed,
            subscribed_at=subscription.subscribed_at if subscription else None,
            can_unsubscribe=allowed,
            cooldown_remaining_seconds=remaining,
        )

    async def list_published(self, user_id: str) -> list[SubscriberNewsletterView]:
        now = self._clock()
        published = await self._newsletters.list_published()
        return list(
            await asyncio.gather(*(self._subscriber_view(n, user_id, now) for n in published))
        )

    async def get_published(self, newsletter_id: str, user_id: str) -> SubscriberNewsletterView:
        """A single published newsletter; drafts are reported as not found."""
        newsletter = await self._newsletters.get(newsletter_id)
        if newsletter is None or not newsletter.is_published:
            raise ResourceNotFoundException("newsletter", newsletter_id)
        return await self._subscriber_view(newsletter, user_id, self._clock())
