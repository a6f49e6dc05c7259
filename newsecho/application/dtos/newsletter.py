"""Newsletter read models with derived counters and per-user subscription state."""

from dataclasses import dataclass
from datetime import datetime

from newsecho.domain.entities import Newsletter, NewsletterCounts


@dataclass(frozen=True)
class NewsletterView:
    newsletter: Newsletter
    counts: NewsletterCounts


@dataclass(frozen=True)
class SubscriberNewsletterView:
    """A published newsletter as seen by one subscriber."""

    newsletter: Newsletter
    counts: NewsletterCounts
    is_subscribed: bool
    subscribed_at: datetime | None
    can_unsubscribe: bool
    cooldown_remaining_seconds: int


@dataclass(frozen=True)
class SubscriptionView:
    newsletter: Newsletter
    subscribed_at: datetime | None
    can_unsubscribe: bool
    cooldown_remaining_seconds: int
