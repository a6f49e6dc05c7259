"""Identity provider selection (AUTH_BACKEND=firebase|memory), one instance per process."""

from __future__ import annotations

import logging

from newsecho.core.config import get_settings
from newsecho.infrastructure.firebase.auth_client import FirebaseIdentityClient
from newsecho.infrastructure.memory.identity import InMemoryIdentityProvider

logger = logging.getLogger(__name__)

_identity_provider: FirebaseIdentityClient | InMemoryIdentityProvider | None = None


def get_identity_provider() -> FirebaseIdentityClient | InMemoryIdentityProvider:
    """Return the process-wide identity provider, creating it on first use."""
    global _identity_provider
    if _identity_provider is None:
        settings = get_settings()
        if settings.auth_backend == "memory":
            _identity_provider = InMemoryIdentityProvider()
            logger.info("Using in-memory identity provider")
        else:
            _identity_provider = FirebaseIdentityClient(
                settings.firebase_api_key.get_secret_value(),
                verification_redirect_url=settings.verification_redirect_url,
                password_reset_redirect_url=settings.password_reset_redirect_url,
            )
    return _identity_provider


async def close_identity_provider() -> None:
    global _identity_provider
    if _identity_provider is not None:
        await _identity_provider.aclose()
        _identity_provider = None
