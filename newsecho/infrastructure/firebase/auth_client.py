"""Firebase Identity Toolkit REST client (implements IIdentityProvider).

Wraps the accounts:* endpoints used by the auth flows. Provider error codes
(e.g. EMAIL_EXISTS, "WEAK_PASSWORD : Password should be ...") are translated
to IdentityProviderException with a user-facing message at this boundary.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from newsecho.application.dtos.identity import ProviderAccount
from newsecho.domain.exceptions import IdentityProviderException

logger = logging.getLogger(__name__)

_IDENTITY_BASE = "https://identitytoolkit.googleapis.com/v1"

PROVIDER_ERROR_MESSAGES: dict[str, str] = {
    "EMAIL_EXISTS": "An account with this email already exists.",
    "EMAIL_NOT_FOUND": "No account found with this email.",
    "INVALID_PASSWORD": "Invalid email or password.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "USER_DISABLED": "This account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many requests. Please try again later.",
    "INVALID_OOB_CODE": "Invalid or missing verification code.",
    "EXPIRED_OOB_CODE": "This link has expired. Please request a new one.",
    "INVALID_EMAIL": "Invalid email format.",
    "WEAK_PASSWORD": "Password should be at least 6 characters.",
    "INVALID_IDP_RESPONSE": "Federated sign-in failed. Please try again.",
    "INVALID_ID_TOKEN": "Your session has expired. Please sign in again.",
    "OPERATION_NOT_ALLOWED": "This sign-in method is not enabled.",
    "API_KEY_INVALID": "Invalid Firebase API key. Please check your configuration.",
}
DEFAULT_PROVIDER_MESSAGE = "Authentication service error. Please try again."


def provider_error_code(raw_message: str) -> str:
    """Extract the code from messages like 'WEAK_PASSWORD : Password should be ...'."""
    return raw_message.split(" ", 1)[0].split(":", 1)[0].strip()


def provider_exception(raw_message: str) -> IdentityProviderException:
    code = provider_error_code(raw_message)
    return IdentityProviderException(
        PROVIDER_ERROR_MESSAGES.get(code, DEFAULT_PROVIDER_MESSAGE), provider_code=code
    )


class FirebaseIdentityClient:
    """Identity Toolkit REST client. One instance per process (shares an httpx pool)."""

    def __init__(
        self,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        verification_redirect_url: str | None = None,
        password_reset_redirect_url: str | None = None,
    ) -> None:
        self._api_key = api_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=15.0)
        self._owns_http = http_client is None
        self._verification_redirect_url = verification_redirect_url
        self._password_reset_redirect_url = password_reset_redirect_url

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._http.post(
                f"{_IDENTITY_BASE}/{endpoint}",
                params={"key": self._api_key},
                json=body,
            )
        except httpx.HTTPError as e:
            logger.warning("Identity provider request %s failed: %s", endpoint, e)
            raise IdentityProviderException(DEFAULT_PROVIDER_MESSAGE) from e
        if resp.status_code >= 400:
            try:
                raw = resp.json().get("error", {}).get("message", "")
            except ValueError:
                raw = ""
            logger.info("Identity provider rejected %s: %s", endpoint, raw or resp.status_code)
            raise provider_exception(raw)
        return resp.json()

    async def _lookup(self, id_token: str) -> dict[str, Any]:
        data = await self._post("accounts:lookup", {"idToken": id_token})
        users = data.get("users") or []
        if not users:
            raise provider_exception("EMAIL_NOT_FOUND")
        return users[0]

    async def sign_up(self, email: str, password: str) -> ProviderAccount:
        data = await self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return ProviderAccount(
            uid=data["localId"],
            email=data.get("email", email),
            email_verified=False,
            id_token=data["idToken"],
        )

    async def sign_in(self, email: str, password: str) -> ProviderAccount:
        data = await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        # signInWithPassword does not report verification state.
        user = await self._lookup(data["idToken"])
        return ProviderAccount(
            uid=data["localId"],
            email=data.get("email", email),
            email_verified=bool(user.get("emailVerified", False)),
            id_token=data["idToken"],
            display_name=data.get("displayName") or user.get("displayName"),
        )

    async def sign_in_with_idp(self, provider_id: str, id_token: str) -> ProviderAccount:
        data = await self._post(
            "accounts:signInWithIdp",
            {
                "postBody": f"id_token={id_token}&providerId={provider_id}",
                "requestUri": "http://localhost",
                "returnSecureToken": True,
                "returnIdpCredential": True,
            },
        )
        return ProviderAccount(
            uid=data["localId"],
            email=data.get("email", ""),
            email_verified=bool(data.get("emailVerified", False)),
            id_token=data["idToken"],
            display_name=data.get("displayName") or data.get("fullName"),
        )

    async def send_email_verification(self, id_token: str) -> None:
        body: dict[str, Any] = {"requestType": "VERIFY_EMAIL", "idToken": id_token}
        if self._verification_redirect_url:
            body["continueUrl"] = self._verification_redirect_url
        await self._post("accounts:sendOobCode", body)

    async def confirm_email_verification(self, oob_code: str) -> str:
        data = await self._post("accounts:update", {"oobCode": oob_code})
        return data.get("email", "")

    async def send_password_reset(self, email: str) -> None:
        body: dict[str, Any] = {"requestType": "PASSWORD_RESET", "email": email}
        if self._password_reset_redirect_url:
            body["continueUrl"] = self._password_reset_redirect_url
        await self._post("accounts:sendOobCode", body)
