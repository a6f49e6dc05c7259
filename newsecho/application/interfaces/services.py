"""Service interfaces (ports) for the application layer.

Protocols for external collaborators: identity provider, image host, cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from newsecho.application.dtos.identity import ProviderAccount


class IIdentityProvider(Protocol):
    """Protocol for the external identity provider (sign-up/sign-in/verify/reset primitives).

    Implementations raise IdentityProviderException with a user-facing message.
    """

    async def sign_up(self, email: str, password: str) -> ProviderAccount:
        """Create an account (unverified) and return it with a fresh id token."""

    async def sign_in(self, email: str, password: str) -> ProviderAccount:
        """Sign in with e-mail and password."""

    async def sign_in_with_idp(self, provider_id: str, id_token: str) -> ProviderAccount:
        """Sign in with a federated provider's id token (e.g. google.com)."""

    async def send_email_verification(self, id_token: str) -> None:
        """Send the verification e-mail to the account behind id_token."""

    async def confirm_email_verification(self, oob_code: str) -> str:
        """Apply a verification code; return the verified e-mail."""

    async def send_password_reset(self, email: str) -> None:
        """Send the password reset e-mail."""

    async def aclose(self) -> None:
        """Release HTTP resources."""


class IImageHost(Protocol):
    """Protocol for the image hosting service."""

    async def upload(self, content: bytes, file_name: str, content_type: str) -> str:
        """Upload image bytes; return the public secure URL."""


class ICacheService(Protocol):
    """Protocol for the cache backend (Redis). Misses and outages both return None."""

    async def get(self, key: str) -> Any | None:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""
