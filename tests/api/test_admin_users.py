"""Tests for admin user management."""

from httpx import AsyncClient

from tests.conftest import USER_EMAIL


async def _user_id(client: AsyncClient, headers: dict[str, str]) -> str:
    return (await client.get("/api/v1/auth/me", headers=headers)).json()["id"]


async def test_list_excludes_admins_and_reports_subscriptions(
    client: AsyncClient,
    admin_headers: dict[str, str],
    user_headers: dict[str, str],
    register,
    create_newsletter,
) -> None:
    await register("quiet@example.com")
    newsletter = await create_newsletter(title="Daily Brief")
    await client.post(f"/api/v1/newsletters/{newsletter['id']}/subscription", headers=user_headers)

    data = (await client.get("/api/v1/admin/users", headers=admin_headers)).json()
    assert data["total"] == 2
    assert data["subscribed"] == 1
    by_email = {u["email"]: u for u in data["users"]}
    assert set(by_email) == {USER_EMAIL, "quiet@example.com"}
    assert by_email[USER_EMAIL]["subscribed_newsletters"] == ["Daily Brief"]
    assert by_email["quiet@example.com"]["is_subscribed"] is False

    subscribed = await client.get(
        "/api/v1/admin/users", params={"status": "subscribed"}, headers=admin_headers
    )
    assert [u["email"] for u in subscribed.json()["users"]] == [USER_EMAIL]

    search = await client.get(
        "/api/v1/admin/users", params={"search": "quiet"}, headers=admin_headers
    )
    assert [u["email"] for u in search.json()["users"]] == ["quiet@example.com"]
    assert search.json()["total"] == 2


async def test_disable_and_enable_user(
    client: AsyncClient, admin_headers: dict[str, str], user_headers: dict[str, str]
) -> None:
    user_id = await _user_id(client, user_headers)
    disabled = await client.patch(
        f"/api/v1/admin/users/{user_id}", json={"enabled": False}, headers=admin_headers
    )
    assert disabled.json() == {"id": user_id, "enabled": False}
    assert (await client.get("/api/v1/auth/me", headers=user_headers)).status_code == 403

    enabled = await client.patch(
        f"/api/v1/admin/users/{user_id}", json={"enabled": True}, headers=admin_headers
    )
    assert enabled.json()["enabled"] is True
    assert (await client.get("/api/v1/auth/me", headers=user_headers)).status_code == 200


async def test_admin_accounts_cannot_be_managed(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    admin_id = await _user_id(client, admin_headers)
    response = await client.patch(
        f"/api/v1/admin/users/{admin_id}", json={"enabled": False}, headers=admin_headers
    )
    assert response.status_code == 400


async def test_delete_user_removes_profile_and_subscriptions(
    client: AsyncClient,
    admin_headers: dict[str, str],
    user_headers: dict[str, str],
    create_newsletter,
) -> None:
    newsletter = await create_newsletter()
    await client.post(f"/api/v1/newsletters/{newsletter['id']}/subscription", headers=user_headers)
    user_id = await _user_id(client, user_headers)

    response = await client.delete(f"/api/v1/admin/users/{user_id}", headers=admin_headers)
    assert response.status_code == 204

    data = (await client.get("/api/v1/admin/users", headers=admin_headers)).json()
    assert data["total"] == 0
    detail = await client.get(
        f"/api/v1/admin/newsletters/{newsletter['id']}", headers=admin_headers
    )
    assert detail.json()["subscribers"] == 0
    # the session no longer maps to a profile
    assert (await client.get("/api/v1/auth/me", headers=user_headers)).status_code == 401


async def test_delete_unknown_user_returns_404(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.delete("/api/v1/admin/users/missing", headers=admin_headers)
    assert response.status_code == 404
