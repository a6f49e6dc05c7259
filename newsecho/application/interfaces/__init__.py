"""Application interfaces (ports): repository and service protocols.

No runtime imports from newsecho.infrastructure or newsecho.api.
"""

from newsecho.application.interfaces.repositories import (
    INewsletterRepository,
    IReplyRepository,
    ISubscriptionRepository,
    IUserRepository,
)
from newsecho.application.interfaces.services import (
    ICacheService,
    IIdentityProvider,
    IImageHost,
)

__all__ = [
    "ICacheService",
    "IIdentityProvider",
    "IImageHost",
    "INewsletterRepository",
    "IReplyRepository",
    "ISubscriptionRepository",
    "IUserRepository",
]
