"""Domain entities: normalized views of store documents."""

from newsecho.domain.entities.newsletter import (
    Newsletter,
    NewsletterCounts,
    NewsletterDraft,
)
from newsecho.domain.entities.reply import Reply
from newsecho.domain.entities.subscription import Subscription, subscription_id
from newsecho.domain.entities.user import (
    NotificationSettings,
    ReplySettings,
    UserProfile,
    UserSettings,
)

__all__ = [
    "Newsletter",
    "NewsletterCounts",
    "NewsletterDraft",
    "NotificationSettings",
    "Reply",
    "ReplySettings",
    "Subscription",
    "UserProfile",
    "UserSettings",
    "subscription_id",
]
