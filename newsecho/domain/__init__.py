"""Domain layer: entities, enums, policies, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from newsecho.domain.entities import (
    Newsletter,
    Reply,
    Subscription,
    UserProfile,
    UserSettings,
)
from newsecho.domain.enums import NewsletterStatus, UserRole
from newsecho.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    NewsEchoException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "NewsEchoException",
    "Newsletter",
    "NewsletterStatus",
    "Reply",
    "ResourceNotFoundException",
    "Subscription",
    "UserProfile",
    "UserRole",
    "UserSettings",
    "ValidationException",
]
