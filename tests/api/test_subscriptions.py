"""Tests for subscribing, the unsubscribe cooldown, and the subscription list."""

from datetime import timedelta

from httpx import AsyncClient

from newsecho.domain.entities import subscription_id
from newsecho.infrastructure.firebase.collections import COLLECTION_SUBSCRIPTIONS
from newsecho.infrastructure.memory import InMemoryDocumentStore
from newsecho.shared.utils.datetime import utc_now


async def _backdate(store: InMemoryDocumentStore, user_id: str, newsletter_id: str, hours: int) -> None:
    ref = store.collection(COLLECTION_SUBSCRIPTIONS).document(subscription_id(user_id, newsletter_id))
    assert await ref.update({"subscribedAt": utc_now() - timedelta(hours=hours)})


async def _me(client: AsyncClient, headers: dict[str, str]) -> str:
    return (await client.get("/api/v1/auth/me", headers=headers)).json()["id"]


async def test_subscribe_reports_cooldown(
    client: AsyncClient, user_headers: dict[str, str], create_newsletter
) -> None:
    newsletter = await create_newsletter()
    response = await client.post(
        f"/api/v1/newsletters/{newsletter['id']}/subscription", headers=user_headers
    )
    assert response.status_code == 201
    data = response.json()
    assert data["newsletter_id"] == newsletter["id"]
    assert data["cooldown_hours"] == 24
    assert data["subscribed_at"] is not None


async def test_subscribe_twice_returns_409(
    client: AsyncClient, user_headers: dict[str, str], create_newsletter
) -> None:
    newsletter = await create_newsletter()
    url = f"/api/v1/newsletters/{newsletter['id']}/subscription"
    await client.post(url, headers=user_headers)
    response = await client.post(url, headers=user_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "ALREADY_SUBSCRIBED"


async def test_cannot_subscribe_to_draft(
    client: AsyncClient, user_headers: dict[str, str], create_newsletter
) -> None:
    draft = await create_newsletter(status="draft")
    response = await client.post(
        f"/api/v1/newsletters/{draft['id']}/subscription", headers=user_headers
    )
    assert response.status_code == 404


async def test_unsubscribe_inside_cooldown_is_refused(
    client: AsyncClient, user_headers: dict[str, str], create_newsletter
) -> None:
    newsletter = await create_newsletter()
    url = f"/api/v1/newsletters/{newsletter['id']}/subscription"
    await client.post(url, headers=user_headers)

    response = await client.delete(url, headers=user_headers)
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "SUBSCRIPTION_COOLDOWN"
    assert body["details"]["cooldown_hours"] == 24
    assert 0 < body["details"]["remaining_seconds"] <= 24 * 3600

    detail = await client.get(f"/api/v1/newsletters/{newsletter['id']}", headers=user_headers)
    assert detail.json()["is_subscribed"] is True
    assert detail.json()["can_unsubscribe"] is False
    assert detail.json()["subscribers"] == 1


async def test_unsubscribe_after_cooldown(
    client: AsyncClient,
    store: InMemoryDocumentStore,
    user_headers: dict[str, str],
    create_newsletter,
) -> None:
    newsletter = await create_newsletter()
    url = f"/api/v1/newsletters/{newsletter['id']}/subscription"
    await client.post(url, headers=user_headers)
    await _backdate(store, await _me(client, user_headers), newsletter["id"], hours=25)

    listing = await client.get("/api/v1/subscriptions", headers=user_headers)
    assert listing.json()[0]["can_unsubscribe"] is True
    assert listing.json()[0]["cooldown_remaining_seconds"] == 0

    response = await client.delete(url, headers=user_headers)
    assert response.status_code == 204

    again = await client.delete(url, headers=user_headers)
    assert again.status_code == 409
    assert again.json()["error"] == "NOT_SUBSCRIBED"


async def test_subscription_list_is_newest_first(
    client: AsyncClient,
    store: InMemoryDocumentStore,
    user_headers: dict[str, str],
    create_newsletter,
) -> None:
    older = await create_newsletter(title="Older")
    newer = await create_newsletter(title="Newer")
    await client.post(f"/api/v1/newsletters/{older['id']}/subscription", headers=user_headers)
    await client.post(f"/api/v1/newsletters/{newer['id']}/subscription", headers=user_headers)
    await _backdate(store, await _me(client, user_headers), older["id"], hours=2)

    response = await client.get("/api/v1/subscriptions", headers=user_headers)
    assert [s["title"] for s in response.json()] == ["Newer", "Older"]
