"""Tests for auth endpoints: sign-up, verification gate, sessions and provider errors."""

from httpx import AsyncClient

from newsecho.infrastructure.memory import InMemoryIdentityProvider
from tests.conftest import ADMIN_EMAIL, PASSWORD, USER_EMAIL


async def test_signup_sends_verification_and_issues_no_session(
    client: AsyncClient, identity: InMemoryIdentityProvider
) -> None:
    response = await client.post(
        "/api/v1/auth/signup",
        json={"email": USER_EMAIL, "password": PASSWORD, "password_confirm": PASSWORD},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == USER_EMAIL
    assert data["verification_sent"] is True
    assert "access_token" not in data
    assert [m.kind for m in identity.outbox] == ["VERIFY_EMAIL"]


async def test_signup_password_mismatch_returns_422(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/signup",
        json={"email": USER_EMAIL, "password": PASSWORD, "password_confirm": "other123"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_signup_short_password_returns_422(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/signup",
        json={"email": USER_EMAIL, "password": "abc", "password_confirm": "abc"},
    )
    assert response.status_code == 422


async def test_duplicate_signup_returns_409_with_friendly_message(
    client: AsyncClient, register
) -> None:
    await register(USER_EMAIL, verify=False)
    response = await client.post(
        "/api/v1/auth/signup",
        json={"email": USER_EMAIL, "password": PASSWORD, "password_confirm": PASSWORD},
    )
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "IDENTITY_PROVIDER_ERROR"
    assert body["details"]["provider_code"] == "EMAIL_EXISTS"
    assert body["message"] == "An account with this email already exists."


async def test_login_before_verification_returns_403(client: AsyncClient, register) -> None:
    await register(USER_EMAIL, verify=False)
    response = await client.post(
        "/api/v1/auth/login", json={"email": USER_EMAIL, "password": PASSWORD}
    )
    assert response.status_code == 403
    assert response.json()["error"] == "EMAIL_NOT_VERIFIED"


async def test_login_after_verification_routes_user_to_dashboard(
    client: AsyncClient, register
) -> None:
    await register(USER_EMAIL)
    response = await client.post(
        "/api/v1/auth/login", json={"email": USER_EMAIL, "password": PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["redirect_to"] == "/user-dashboard"
    assert data["user"]["role"] == "user"


async def test_bootstrap_admin_is_routed_to_console(client: AsyncClient, register) -> None:
    await register(ADMIN_EMAIL)
    response = await client.post(
        "/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["redirect_to"] == "/admin"
    assert response.json()["user"]["role"] == "admin"


async def test_wrong_password_returns_401(client: AsyncClient, register) -> None:
    await register(USER_EMAIL)
    response = await client.post(
        "/api/v1/auth/login", json={"email": USER_EMAIL, "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.headers.get("www-authenticate") == "Bearer"
    assert response.json()["message"] == "Invalid email or password."


async def test_me_requires_session(client: AsyncClient) -> None:
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_me_rejects_garbage_token(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired session"


async def test_me_returns_profile(client: AsyncClient, user_headers: dict[str, str]) -> None:
    response = await client.get("/api/v1/auth/me", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["email"] == USER_EMAIL
    assert response.json()["enabled"] is True


async def test_federated_sign_in_creates_verified_profile(
    client: AsyncClient, identity: InMemoryIdentityProvider
) -> None:
    identity.register_federated_token("google-id-token", "fed@example.com", "Fed Reader")
    response = await client.post(
        "/api/v1/auth/federated",
        json={"provider_id": "google.com", "id_token": "google-id-token"},
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "fed@example.com"
    assert user["display_name"] == "Fed Reader"


async def test_federated_sign_in_with_unknown_token_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/federated", json={"id_token": "forged"})
    assert response.status_code == 400
    assert response.json()["details"]["provider_code"] == "INVALID_IDP_RESPONSE"


async def test_resend_verification(
    client: AsyncClient, register, identity: InMemoryIdentityProvider
) -> None:
    await register(USER_EMAIL, verify=False)
    response = await client.post(
        "/api/v1/auth/send-verification", json={"email": USER_EMAIL, "password": PASSWORD}
    )
    assert response.status_code == 200
    assert "Verification email sent" in response.json()["message"]
    assert len(identity.outbox) == 2


async def test_resend_verification_when_already_verified(
    client: AsyncClient, register
) -> None:
    await register(USER_EMAIL)
    response = await client.post(
        "/api/v1/auth/send-verification", json={"email": USER_EMAIL, "password": PASSWORD}
    )
    assert response.status_code == 200
    assert "already verified" in response.json()["message"]


async def test_verify_email_with_bad_code_returns_400(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/verify-email", json={"oob_code": "nope"})
    assert response.status_code == 400
    assert response.json()["details"]["provider_code"] == "INVALID_OOB_CODE"


async def test_password_reset_queues_message(
    client: AsyncClient, register, identity: InMemoryIdentityProvider
) -> None:
    await register(USER_EMAIL)
    response = await client.post("/api/v1/auth/reset-password", json={"email": USER_EMAIL})
    assert response.status_code == 200
    assert identity.last_code(USER_EMAIL, kind="PASSWORD_RESET")


async def test_logout_without_session_succeeds(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/logout")
    assert response.status_code == 200


async def test_disabled_user_cannot_use_session(
    client: AsyncClient, admin_headers: dict[str, str], user_headers: dict[str, str]
) -> None:
    me = (await client.get("/api/v1/auth/me", headers=user_headers)).json()
    disable = await client.patch(
        f"/api/v1/admin/users/{me['id']}", json={"enabled": False}, headers=admin_headers
    )
    assert disable.status_code == 200

    response = await client.get("/api/v1/auth/me", headers=user_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "ACCOUNT_DISABLED"

    login = await client.post(
        "/api/v1/auth/login", json={"email": USER_EMAIL, "password": PASSWORD}
    )
    assert login.status_code == 403
    assert login.json()["error"] == "ACCOUNT_DISABLED"
