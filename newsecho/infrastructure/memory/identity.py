"""In-memory identity provider (implements IIdentityProvider) for development and tests.

Passwords are bcrypt-hashed. Verification and reset "e-mails" are recorded in
an outbox with their out-of-band codes instead of being sent. Federated sign-in
accepts id tokens registered with register_federated_token().
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass

from newsecho.application.dtos.identity import ProviderAccount
from newsecho.domain.exceptions import IdentityProviderException
from newsecho.infrastructure.firebase.auth_client import provider_exception
from newsecho.infrastructure.security.password import hash_password, verify_password
from newsecho.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

_MIN_PASSWORD_LENGTH = 6


@dataclass
class _Account:
    uid: str
    email: str
    password_hash: str | None
    email_verified: bool = False
    disabled: bool = False
    display_name: str | None = None


@dataclass(frozen=True)
class OutboxMessage:
    """A provider e-mail that would have been sent."""

    kind: str  # VERIFY_EMAIL | PASSWORD_RESET
    email: str
    oob_code: str


class InMemoryIdentityProvider:
    def __init__(self) -> None:
        self._accounts: dict[str, _Account] = {}
        self._id_tokens: dict[str, str] = {}
        self._oob_codes: dict[str, OutboxMessage] = {}
        self._federated: dict[str, tuple[str, str, str | None]] = {}
        self.outbox: list[OutboxMessage] = []

    async def aclose(self) -> None:
        return None

    def _issue_token(self, account: _Account) -> ProviderAccount:
        token = secrets.token_urlsafe(24)
        self._id_tokens[token] = account.email
        return ProviderAccount(
            uid=account.uid,
            email=account.email,
            email_verified=account.email_verified,
            id_token=token,
            display_name=account.display_name,
        )

    def _queue(self, kind: str, email: str) -> OutboxMessage:
        message = OutboxMessage(kind=kind, email=email, oob_code=secrets.token_urlsafe(16))
        self._oob_codes[message.oob_code] = message
        self.outbox.append(message)
        logger.info("Queued %s e-mail for %s", kind, email)
        return message

    async def sign_up(self, email: str, password: str) -> ProviderAccount:
        key = email.lower()
        if key in self._accounts:
            raise provider_exception("EMAIL_EXISTS")
        if len(password) < _MIN_PASSWORD_LENGTH:
            raise provider_exception("WEAK_PASSWORD : Password should be at least 6 characters")
        account = _Account(
            uid=generate_cuid(),
            email=email,
            password_hash=await asyncio.to_thread(hash_password, password),
        )
        self._accounts[key] = account
        return self._issue_token(account)

    async def sign_in(self, email: str, password: str) -> ProviderAccount:
        account = self._accounts.get(email.lower())
        if account is None or account.password_hash is None:
            raise provider_exception("INVALID_LOGIN_CREDENTIALS")
        if not await asyncio.to_thread(verify_password, password, account.password_hash):
            raise provider_exception("INVALID_LOGIN_CREDENTIALS")
        if account.disabled:
            raise provider_exception("USER_DISABLED")
        return self._issue_token(account)

    def register_federated_token(
        self, id_token: str, email: str, display_name: str | None = None, provider_id: str = "google.com"
    ) -> None:
        """Make id_token acceptable to sign_in_with_idp for provider_id."""
        self._federated[id_token] = (provider_id, email, display_name)

    async def sign_in_with_idp(self, provider_id: str, id_token: str) -> ProviderAccount:
        entry = self._federated.get(id_token)
        if entry is None or entry[0] != provider_id:
            raise provider_exception("INVALID_IDP_RESPONSE")
        _, email, display_name = entry
        account = self._accounts.get(email.lower())
        if account is None:
            # Federated identities arrive verified by the upstream provider.
            account = _Account(
                uid=generate_cuid(),
                email=email,
                password_hash=None,
                email_verified=True,
                display_name=display_name,
            )
            self._accounts[email.lower()] = account
        if account.disabled:
            raise provider_exception("USER_DISABLED")
        return self._issue_token(account)

    async def send_email_verification(self, id_token: str) -> None:
        email = self._id_tokens.get(id_token)
        if email is None:
            raise provider_exception("INVALID_ID_TOKEN")
        self._queue("VERIFY_EMAIL", email)

    async def confirm_email_verification(self, oob_code: str) -> str:
        message = self._oob_codes.get(oob_code)
        if message is None or message.kind != "VERIFY_EMAIL":
            raise provider_exception("INVALID_OOB_CODE")
        del self._oob_codes[oob_code]
        account = self._accounts[message.email.lower()]
        account.email_verified = True
        return account.email

    async def send_password_reset(self, email: str) -> None:
        if email.lower() not in self._accounts:
            raise provider_exception("EMAIL_NOT_FOUND")
        self._queue("PASSWORD_RESET", email)

    def last_code(self, email: str, kind: str = "VERIFY_EMAIL") -> str:
        """Most recent out-of-band code sent to email (tests and local dev)."""
        for message in reversed(self.outbox):
            if message.kind == kind and message.email.lower() == email.lower():
                return message.oob_code
        raise IdentityProviderException("No message queued", provider_code="NOT_FOUND")

    def set_disabled(self, email: str, disabled: bool = True) -> None:
        self._accounts[email.lower()].disabled = disabled
