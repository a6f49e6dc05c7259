"""Tests for SubscriptionService with a controllable clock."""

from datetime import UTC, datetime, timedelta

import pytest

from newsecho.application.services import SubscriptionService, subscription_state
from newsecho.domain.entities import Newsletter, Subscription
from newsecho.domain.enums import NewsletterStatus
from newsecho.domain.exceptions import (
    AlreadySubscribedException,
    NotSubscribedException,
    ResourceNotFoundException,
    SubscriptionCooldownException,
)
from newsecho.infrastructure.firebase.repositories import (
    FirestoreNewsletterRepository,
    FirestoreSubscriptionRepository,
)
from newsecho.infrastructure.memory import InMemoryDocumentStore

START = datetime(2024, 6, 1, 9, 0, tzinfo=UTC)


class Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingCache:
    def __init__(self) -> None:
        self.deleted: list[str] = []

    async def get(self, key):
        return None

    async def set(self, key, value, ttl=300):
        return True

    async def delete(self, key):
        self.deleted.append(key)
        return True


@pytest.fixture
async def setup():
    store = InMemoryDocumentStore()
    newsletters = FirestoreNewsletterRepository(store)
    await newsletters.save(
        Newsletter(id="pub", title="T", content="C", status=NewsletterStatus.PUBLISHED, published_at=START)
    )
    await newsletters.save(Newsletter(id="draft", title="T", content="C"))
    clock = Clock(START)
    cache = RecordingCache()
    service = SubscriptionService(
        newsletters, FirestoreSubscriptionRepository(store), cache, cooldown_hours=24, clock=clock
    )
    return service, clock, cache


def test_subscription_state_rounds_remaining_up() -> None:
    sub = Subscription("u1", "n1", START)
    now = START + timedelta(hours=23, minutes=59, seconds=59, microseconds=500000)
    assert subscription_state(sub, now, timedelta(hours=24)) == (True, False, 1)
    assert subscription_state(None, now, timedelta(hours=24)) == (False, False, 0)


async def test_cooldown_boundary(setup) -> None:
    service, clock, cache = setup
    await service.subscribe("u1", "pub")
    assert cache.deleted == ["dashboard:summary"]

    clock.now = START + timedelta(hours=23)
    with pytest.raises(SubscriptionCooldownException) as info:
        await service.unsubscribe("u1", "pub")
    assert info.value.details["remaining_seconds"] == 3600

    clock.now = START + timedelta(hours=24)
    await service.unsubscribe("u1", "pub")
    assert await service.list_for_user("u1") == []


async def test_duplicate_and_missing(setup) -> None:
    service, _, _ = setup
    await service.subscribe("u1", "pub")
    with pytest.raises(AlreadySubscribedException):
        await service.subscribe("u1", "pub")
    with pytest.raises(ResourceNotFoundException):
        await service.subscribe("u1", "draft")
    with pytest.raises(ResourceNotFoundException):
        await service.subscribe("u1", "gone")
    with pytest.raises(NotSubscribedException):
        await service.unsubscribe("u2", "pub")


async def test_zero_cooldown_allows_immediate_unsubscribe() -> None:
    store = InMemoryDocumentStore()
    newsletters = FirestoreNewsletterRepository(store)
    await newsletters.save(Newsletter(id="pub", title="T", content="C", status=NewsletterStatus.PUBLISHED))
    service = SubscriptionService(newsletters, FirestoreSubscriptionRepository(store), cooldown_hours=0)
    await service.subscribe("u1", "pub")
    await service.unsubscribe("u1", "pub")
