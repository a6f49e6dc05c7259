"""Tests for the admin dashboard summary."""

from httpx import AsyncClient


async def test_empty_dashboard(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    response = await client.get("/api/v1/admin/dashboard", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["newsletters"]["total"] == 0
    assert data["subscribers"]["total"] == 0
    assert data["last_published"] is None
    assert data["recent_newsletters"] == []
    assert data["engagement_series"] == [0] * 7
    assert len(data["engagement_labels"]) == 7
    assert data["engagement_growth"] == 0.0


async def test_dashboard_counts_activity(
    client: AsyncClient,
    admin_headers: dict[str, str],
    user_headers: dict[str, str],
    create_newsletter,
) -> None:
    first = await create_newsletter(title="First Issue")
    await create_newsletter(title="Second Issue")
    await create_newsletter(title="Unfinished", status="draft")
    await client.post(f"/api/v1/newsletters/{first['id']}/subscription", headers=user_headers)
    await client.post(
        "/api/v1/replies",
        json={"newsletter_id": first["id"], "message": "Nice"},
        headers=user_headers,
    )

    data = (await client.get("/api/v1/admin/dashboard", headers=admin_headers)).json()
    assert data["newsletters"]["total"] == 3
    assert data["newsletters"]["current_period"] == 3
    assert data["newsletters"]["growth"] == 100.0
    # admins are not counted as subscribers
    assert data["subscribers"]["total"] == 1
    assert data["replies"]["total"] == 1
    assert data["last_published"]["title"] == "Second Issue"
    assert [n["title"] for n in data["recent_newsletters"]] == [
        "Unfinished",
        "Second Issue",
        "First Issue",
    ]
    assert data["engagement_series"][-1] == 1
    assert sum(data["engagement_series"]) == 1


async def test_dashboard_is_admin_only(
    client: AsyncClient, user_headers: dict[str, str]
) -> None:
    response = await client.get("/api/v1/admin/dashboard", headers=user_headers)
    assert response.status_code == 403
