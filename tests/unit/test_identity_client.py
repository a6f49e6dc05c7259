"""Tests for the Identity Toolkit REST client (httpx.MockTransport)."""

import json

import httpx
import pytest

from newsecho.domain.exceptions import IdentityProviderException
from newsecho.infrastructure.firebase.auth_client import (
    FirebaseIdentityClient,
    provider_error_code,
    provider_exception,
)


def _client(handler) -> FirebaseIdentityClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirebaseIdentityClient(
        "api-key", http_client=http, verification_redirect_url="https://app.example.com/verify"
    )


def test_provider_error_code_strips_detail() -> None:
    assert provider_error_code("WEAK_PASSWORD : Password should be at least 6 characters") == "WEAK_PASSWORD"
    assert provider_error_code("EMAIL_EXISTS") == "EMAIL_EXISTS"


def test_unknown_provider_code_gets_default_message() -> None:
    exc = provider_exception("SOMETHING_NEW")
    assert exc.provider_code == "SOMETHING_NEW"
    assert exc.message == "Authentication service error. Please try again."


async def test_sign_in_looks_up_verification_state() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        assert request.url.params["key"] == "api-key"
        if request.url.path.endswith("accounts:signInWithPassword"):
            return httpx.Response(200, json={"localId": "uid-1", "email": "a@example.com", "idToken": "tok"})
        assert json.loads(request.content) == {"idToken": "tok"}
        return httpx.Response(200, json={"users": [{"emailVerified": True, "displayName": "Ada"}]})

    account = await _client(handler).sign_in("a@example.com", "secret123")
    assert calls == ["/v1/accounts:signInWithPassword", "/v1/accounts:lookup"]
    assert account.uid == "uid-1"
    assert account.email_verified is True
    assert account.display_name == "Ada"


async def test_provider_error_is_translated() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 400, "message": "EMAIL_EXISTS"}})

    with pytest.raises(IdentityProviderException) as info:
        await _client(handler).sign_up("a@example.com", "secret123")
    assert info.value.provider_code == "EMAIL_EXISTS"
    assert info.value.message == "An account with this email already exists."


async def test_network_failure_is_a_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(IdentityProviderException):
        await _client(handler).send_password_reset("a@example.com")


async def test_verification_mail_includes_continue_url() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    await _client(handler).send_email_verification("tok")
    assert bodies == [
        {"requestType": "VERIFY_EMAIL", "idToken": "tok", "continueUrl": "https://app.example.com/verify"}
    ]


async def test_confirm_email_verification_returns_email() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {"oobCode": "code-1"}
        return httpx.Response(200, json={"email": "a@example.com", "emailVerified": True})

    assert await _client(handler).confirm_email_verification("code-1") == "a@example.com"
