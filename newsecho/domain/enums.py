"""Domain enumerations for NewsEcho.

Enums represent fixed sets of domain values (roles, newsletter status, list filters).
"""

from enum import Enum


class UserRole(str, Enum):
    """Role attribute on a user profile.

    Admins manage content and see the console; users subscribe and reply.
    """

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]


class NewsletterStatus(str, Enum):
    """Newsletter lifecycle status. Only published newsletters reach subscribers."""

    PUBLISHED = "published"
    DRAFT = "draft"


class NewsletterStatusFilter(str, Enum):
    """Admin newsletter list filter."""

    ALL = "all"
    PUBLISHED = "published"
    DRAFT = "draft"


class ReplyReadFilter(str, Enum):
    """Admin reply inbox filter."""

    ALL = "all"
    READ = "read"
    UNREAD = "unread"


class UserSubscriptionFilter(str, Enum):
    """Admin user list filter (subscribed = has at least one subscription)."""

    ALL = "all"
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"
