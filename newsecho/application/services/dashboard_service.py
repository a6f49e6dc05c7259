"""Admin dashboard aggregation: totals, growth windows, recent issues, engagement."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta

from newsecho.application.dtos.dashboard import (
    DashboardSummary,
    MetricSummary,
    NewsletterDigest,
)
from newsecho.application.interfaces import (
    ICacheService,
    INewsletterRepository,
    IReplyRepository,
    ISubscriptionRepository,
    IUserRepository,
)
from newsecho.domain.entities import Newsletter
from newsecho.domain.enums import UserRole
from newsecho.domain.policies import count_in_windows, daily_series, engagement_growth
from newsecho.shared.telemetry import get_logger, traced
from newsecho.shared.utils.datetime import utc_now

logger = get_logger(__name__)

DASHBOARD_CACHE_KEY = "dashboard:summary"


async def invalidate_dashboard(cache: ICacheService | None) -> None:
    """Drop the cached summary after any newsletter, subscription or reply write."""
    if cache is not None:
        await cache.delete(DASHBOARD_CACHE_KEY)


def _metric(timestamps: list[datetime | None], now: datetime, window: timedelta) -> MetricSummary:
    counts = count_in_windows(timestamps, now, window)
    return MetricSummary(
        total=len(timestamps),
        current_period=counts.current,
        previous_period=counts.previous,
        growth=counts.growth,
    )


class DashboardService:
    def __init__(
        self,
        newsletters: INewsletterRepository,
        users: IUserRepository,
        replies: IReplyRepository,
        subscriptions: ISubscriptionRepository,
        cache: ICacheService | None = None,
        *,
        cache_ttl: int = 120,
        growth_window_days: int = 7,
        engagement_days: int = 7,
        recent_limit: int = 3,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._newsletters = newsletters
        self._users = users
        self._replies = replies
        self._subscriptions = subscriptions
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._window = timedelta(days=growth_window_days)
        self._engagement_days = engagement_days
        self._recent_limit = recent_limit
        self._clock = clock

    async def _digest(self, newsletter: Newsletter) -> NewsletterDigest:
        subscribers, replies = await asyncio.gather(
            self._subscriptions.count_for_newsletter(newsletter.id),
            self._replies.count_for_newsletter(newsletter.id),
        )
        return NewsletterDigest(
            id=newsletter.id,
            title=newsletter.title,
            status=newsletter.status.value,
            category=newsletter.category,
            date=newsletter.activity_date,
            subscribers=subscribers,
            replies=replies,
        )

    @traced("dashboard.summary")
    async def summary(self) -> DashboardSummary:
        """Return the dashboard summary, from cache when fresh."""
        if self._cache is not None:
            cached = await self._cache.get(DASHBOARD_CACHE_KEY)
            if cached is not None:
                return DashboardSummary.from_cache(cached)

        now = self._clock()
        newsletters, subscribers, replies = await asyncio.gather(
            self._newsletters.list_all(),
            self._users.list_by_role(UserRole.USER),
            self._replies.list_all(),
        )
        inbound = [r for r in replies if r.in_reply_to is None]

        by_activity = sorted(
            (n for n in newsletters if n.activity_date is not None),
            key=lambda n: n.activity_date,
            reverse=True,
        )
        published = sorted(
            (n for n in newsletters if n.is_published and n.published_at is not None),
            key=lambda n: n.published_at,
            reverse=True,
        )
        recent = await asyncio.gather(
            *(self._digest(n) for n in by_activity[: self._recent_limit])
        )
        last_published = await self._digest(published[0]) if published else None

        today = now.date()
        series = daily_series([r.timestamp for r in inbound], today, self._engagement_days)
        labels = [
            (today - timedelta(days=self._engagement_days - 1 - i)).strftime("%a")
            for i in range(self._engagement_days)
        ]

        result = DashboardSummary(
            newsletters=_metric([n.activity_date for n in newsletters], now, self._window),
            subscribers=_metric([u.created_at for u in subscribers], now, self._window),
            replies=_metric([r.timestamp for r in inbound], now, self._window),
            last_published=last_published,
            recent_newsletters=list(recent),
            engagement_series=series,
            engagement_labels=labels,
            engagement_growth=engagement_growth(series),
            generated_at=now,
        )
        if self._cache is not None:
            await self._cache.set(DASHBOARD_CACHE_KEY, result.to_cache(), ttl=self._cache_ttl)
        logger.debug("Dashboard summary computed over %s newsletters", len(newsletters))
        return result
