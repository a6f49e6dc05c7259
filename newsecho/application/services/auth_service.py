"""Auth application service: provider flows plus profile bootstrap and session issue."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from newsecho.application.dtos.auth import SessionResult, SignUpResult
from newsecho.application.dtos.identity import ProviderAccount
from newsecho.application.interfaces import IIdentityProvider, IUserRepository
from newsecho.domain.entities import UserProfile, UserSettings
from newsecho.domain.enums import UserRole
from newsecho.domain.exceptions import (
    AccountDisabledException,
    EmailNotVerifiedException,
    IdentityProviderException,
)
from newsecho.shared.telemetry import get_logger, traced
from newsecho.shared.utils.datetime import utc_now

logger = get_logger(__name__)

ADMIN_HOME = "/admin"
USER_HOME = "/user-dashboard"


class AuthService:
    """Sign-up, sign-in (password and federated), verification and reset.

    Sessions are only issued for accounts whose e-mail the provider reports
    as verified and whose profile is enabled.
    """

    def __init__(
        self,
        identity: IIdentityProvider,
        users: IUserRepository,
        issue_token: Callable[[UserProfile], str],
        admin_emails: frozenset[str] = frozenset(),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._identity = identity
        self._users = users
        self._issue_token = issue_token
        self._admin_emails = admin_emails
        self._clock = clock

    def _initial_role(self, email: str) -> UserRole:
        return UserRole.ADMIN if email.lower() in self._admin_emails else UserRole.USER

    async def _ensure_profile(self, account: ProviderAccount) -> UserProfile:
        profile = await self._users.get(account.uid)
        if profile is not None:
            return profile
        now = self._clock()
        profile = UserProfile(
            id=account.uid,
            email=account.email,
            role=self._initial_role(account.email),
            display_name=account.display_name,
            created_at=now,
            last_active=now,
            settings=UserSettings(full_name=account.display_name or "", email=account.email),
        )
        await self._users.save(profile)
        logger.info("Created %s profile for %s", profile.role.value, account.uid)
        return profile

    @traced("auth.sign_up")
    async def sign_up(self, email: str, password: str) -> SignUpResult:
        account = await self._identity.sign_up(email, password)
        verification_sent = True
        try:
            await self._identity.send_email_verification(account.id_token)
        except IdentityProviderException as e:
            logger.warning("Verification e-mail for %s not sent: %s", account.uid, e.message)
            verification_sent = False
        await self._ensure_profile(account)
        return SignUpResult(uid=account.uid, email=account.email, verification_sent=verification_sent)

    async def _establish_session(self, account: ProviderAccount) -> SessionResult:
        if not account.email_verified:
            raise EmailNotVerifiedException(account.email)
        profile = await self._ensure_profile(account)
        if not profile.enabled:
            raise AccountDisabledException()
        profile.last_active = self._clock()
        await self._users.update_fields(profile.id, {"lastActive": profile.last_active})
        return SessionResult(
            access_token=self._issue_token(profile),
            profile=profile,
            redirect_to=ADMIN_HOME if profile.is_admin else USER_HOME,
        )

    @traced("auth.sign_in")
    async def sign_in(self, email: str, password: str) -> SessionResult:
        account = await self._identity.sign_in(email, password)
        return await self._establish_session(account)

    @traced("auth.sign_in_federated")
    async def sign_in_federated(self, provider_id: str, id_token: str) -> SessionResult:
        account = await self._identity.sign_in_with_idp(provider_id, id_token)
        return await self._establish_session(account)

    async def send_verification(self, email: str, password: str) -> bool:
        """Resend the verification e-mail. Returns False when already verified."""
        account = await self._identity.sign_in(email, password)
        if account.email_verified:
            return False
        await self._identity.send_email_verification(account.id_token)
        return True

    async def verify_email(self, oob_code: str) -> str:
        email = await self._identity.confirm_email_verification(oob_code)
        logger.info("E-mail verified via out-of-band code")
        return email

    async def send_password_reset(self, email: str) -> None:
        await self._identity.send_password_reset(email)

    async def sign_out(self, user_id: str | None) -> None:
        # Sessions are stateless bearer tokens; the client discards its copy.
        logger.info("Sign-out for %s", user_id or "anonymous")
