"""Pytest configuration and fixtures for newsecho.

HTTP tests run newsecho.main:app against a fresh in-memory document store and
identity provider per test (dependency overrides). Environment is set before
newsecho is imported so create_app() sees a valid configuration.
"""

import os

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "reader@example.com"
PASSWORD = "secret123"

os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef0123456789abcdef"
os.environ["DATABASE_BACKEND"] = "memory"
os.environ["AUTH_BACKEND"] = "memory"
os.environ["ADMIN_EMAILS"] = ADMIN_EMAIL
os.environ["REDIS_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from newsecho.api.v1.dependencies import get_document_store, get_identity_provider  # noqa: E402
from newsecho.core.config import get_settings  # noqa: E402
from newsecho.core.limiter import limiter  # noqa: E402
from newsecho.infrastructure.memory import (  # noqa: E402
    InMemoryDocumentStore,
    InMemoryIdentityProvider,
)

get_settings.cache_clear()
limiter.enabled = False

from newsecho.main import app  # noqa: E402


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider()


@pytest.fixture
async def client(store: InMemoryDocumentStore, identity: InMemoryIdentityProvider) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with in-memory backends."""
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: identity
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def register(client: AsyncClient, identity: InMemoryIdentityProvider):
    """Sign up through the API and (by default) confirm the verification code."""

    async def _register(email: str, password: str = PASSWORD, verify: bool = True) -> dict:
        response = await client.post(
            "/api/v1/auth/signup",
            json={"email": email, "password": password, "password_confirm": password},
        )
        assert response.status_code == 201, response.text
        if verify:
            confirm = await client.post(
                "/api/v1/auth/verify-email", json={"oob_code": identity.last_code(email)}
            )
            assert confirm.status_code == 200, confirm.text
        return response.json()

    return _register


@pytest.fixture
def login(client: AsyncClient):
    """Sign in and return Authorization headers."""

    async def _login(email: str, password: str = PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
async def admin_headers(register, login) -> dict[str, str]:
    await register(ADMIN_EMAIL)
    return await login(ADMIN_EMAIL)


@pytest.fixture
async def user_headers(register, login) -> dict[str, str]:
    await register(USER_EMAIL)
    return await login(USER_EMAIL)


@pytest.fixture
def create_newsletter(client: AsyncClient, admin_headers: dict[str, str]):
    """Create a newsletter through the admin API and return its JSON."""

    async def _create(
        title: str = "Weekly Digest",
        content: str = "<p>Hello readers</p>",
        status: str = "published",
        **extra,
    ) -> dict:
        response = await client.post(
            "/api/v1/admin/newsletters",
            json={"title": title, "content": content, "status": status, **extra},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
