"""Tests for DashboardService caching and metrics."""

from datetime import UTC, datetime, timedelta

from newsecho.application.dtos.dashboard import DashboardSummary
from newsecho.application.services import DASHBOARD_CACHE_KEY, DashboardService
from newsecho.domain.entities import Newsletter, Reply, UserProfile
from newsecho.domain.enums import NewsletterStatus, UserRole
from newsecho.infrastructure.firebase.repositories import (
    FirestoreNewsletterRepository,
    FirestoreReplyRepository,
    FirestoreSubscriptionRepository,
    FirestoreUserRepository,
)
from newsecho.infrastructure.memory import InMemoryDocumentStore

NOW = datetime(2024, 6, 12, 15, 0, tzinfo=UTC)


class DictCache:
    def __init__(self) -> None:
        self.data: dict = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ttl=300):
        self.data[key] = value
        return True

    async def delete(self, key):
        return self.data.pop(key, None) is not None


async def _service(store: InMemoryDocumentStore, cache=None) -> DashboardService:
    return DashboardService(
        FirestoreNewsletterRepository(store),
        FirestoreUserRepository(store),
        FirestoreReplyRepository(store),
        FirestoreSubscriptionRepository(store),
        cache,
        clock=lambda: NOW,
    )


async def _seed(store: InMemoryDocumentStore) -> None:
    newsletters = FirestoreNewsletterRepository(store)
    await newsletters.save(
        Newsletter(
            id="n1",
            title="Old",
            content="C",
            status=NewsletterStatus.PUBLISHED,
            published_at=NOW - timedelta(days=10),
            created_at=NOW - timedelta(days=12),
        )
    )
    await newsletters.save(
        Newsletter(id="n2", title="New", content="C", created_at=NOW - timedelta(days=1))
    )
    users = FirestoreUserRepository(store)
    await users.save(UserProfile(id="u1", email="u1@example.com", created_at=NOW - timedelta(days=2)))
    await users.save(
        UserProfile(id="a1", email="a1@example.com", role=UserRole.ADMIN, created_at=NOW)
    )
    replies = FirestoreReplyRepository(store)
    base = dict(newsletter_id="n1", newsletter_title="Old", message="m", user_email="u1@example.com")
    await replies.save(Reply(id="r1", sender_id="u1", sender_name="U", timestamp=NOW - timedelta(hours=1), **base))
    await replies.save(Reply(id="r2", sender_id="u1", sender_name="U", timestamp=NOW - timedelta(days=6), **base))
    await replies.save(
        Reply(id="r3", sender_id="a1", sender_name="A", timestamp=NOW, in_reply_to="r1", read=True, **base)
    )


async def test_summary_metrics() -> None:
    store = InMemoryDocumentStore()
    await _seed(store)
    summary = await (await _service(store)).summary()

    assert summary.newsletters.total == 2
    assert (summary.newsletters.current_period, summary.newsletters.previous_period) == (1, 1)
    assert summary.newsletters.growth == 0.0
    assert summary.subscribers.total == 1
    assert summary.replies.total == 2
    assert summary.last_published.id == "n1"
    assert summary.last_published.replies == 3
    assert [d.id for d in summary.recent_newsletters] == ["n2", "n1"]
    assert summary.engagement_series == [1, 0, 0, 0, 0, 0, 1]
    assert summary.engagement_labels[-1] == "Wed"
    assert summary.engagement_growth == 0.0


async def test_summary_is_served_from_cache_until_invalidated() -> None:
    store = InMemoryDocumentStore()
    await _seed(store)
    cache = DictCache()
    service = await _service(store, cache)

    first = await service.summary()
    assert DASHBOARD_CACHE_KEY in cache.data
    await FirestoreNewsletterRepository(store).delete("n2")
    cached = await service.summary()
    assert cached == first

    await cache.delete(DASHBOARD_CACHE_KEY)
    fresh = await service.summary()
    assert fresh.newsletters.total == 1


def test_cache_payload_roundtrip() -> None:
    from newsecho.application.dtos.dashboard import MetricSummary, NewsletterDigest

    metric = MetricSummary(total=1, current_period=1, previous_period=0, growth=100.0)
    digest = NewsletterDigest(
        id="n1", title="T", status="published", category="General", date=NOW, subscribers=2, replies=0
    )
    summary = DashboardSummary(
        newsletters=metric,
        subscribers=metric,
        replies=metric,
        last_published=digest,
        recent_newsletters=[digest],
        engagement_series=[0] * 7,
        engagement_labels=["Mon"] * 7,
        engagement_growth=0.0,
        generated_at=NOW,
    )
    assert DashboardSummary.from_cache(summary.to_cache()) == summary
