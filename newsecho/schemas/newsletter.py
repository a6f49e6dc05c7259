"""Newsletter API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from newsecho.application.dtos.newsletter import (
    NewsletterView,
    SubscriberNewsletterView,
    SubscriptionView,
)
from newsecho.domain.entities import NewsletterDraft
from newsecho.domain.enums import NewsletterStatus


class NewsletterWrite(BaseModel):
    """Body for creating or editing a newsletter. status=draft saves, published publishes."""

    title: str = Field(..., max_length=300)
    content: str = Field(..., max_length=100_000)
    status: NewsletterStatus = NewsletterStatus.DRAFT
    category: str | None = Field(default=None, max_length=100)
    author: str | None = Field(default=None, max_length=200)
    image_url: str | None = Field(default=None, max_length=2048)

    def to_draft(self) -> NewsletterDraft:
        return NewsletterDraft(
            title=self.title,
            content=self.content,
            status=self.status,
            category=self.category,
            author=self.author,
            image_url=self.image_url,
        )


class NewsletterResponse(BaseModel):
    id: str
    title: str
    content: str
    status: NewsletterStatus
    category: str
    author: str
    image_url: str | None
    published_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    subscribers: int
    replies: int

    @classmethod
    def from_view(cls, view: NewsletterView) -> "NewsletterResponse":
        n = view.newsletter
        return cls(
            id=n.id,
            title=n.title,
            content=n.content,
            status=n.status,
            category=n.category,
            author=n.author,
            image_url=n.image_url,
            published_at=n.published_at,
            created_at=n.created_at,
            updated_at=n.updated_at,
            subscribers=view.counts.subscribers,
            replies=view.counts.replies,
        )


class SubscriberNewsletterResponse(BaseModel):
    """Published newsletter with the caller's subscription state."""

    id: str
    title: str
    content: str
    category: str
    author: str
    image_url: str | None
    published_at: datetime | None
    subscribers: int
    replies: int
    is_subscribed: bool
    subscribed_at: datetime | None
    can_unsubscribe: bool
    cooldown_remaining_seconds: int

    @classmethod
    def from_view(cls, view: SubscriberNewsletterView) -> "SubscriberNewsletterResponse":
        n = view.newsletter
        return cls(
            id=n.id,
            title=n.title,
            content=n.content,
            category=n.category,
            author=n.author,
            image_url=n.image_url,
            published_at=n.published_at,
            subscribers=view.counts.subscribers,
            replies=view.counts.replies,
            is_subscribed=view.is_subscribed,
            subscribed_at=view.subscribed_at,
            can_unsubscribe=view.can_unsubscribe,
            cooldown_remaining_seconds=view.cooldown_remaining_seconds,
        )


class SubscriptionResponse(BaseModel):
    newsletter_id: str
    title: str
    category: str
    author: str
    published_at: datetime | None
    subscribed_at: datetime | None
    can_unsubscribe: bool
    cooldown_remaining_seconds: int

    @classmethod
    def from_view(cls, view: SubscriptionView) -> "SubscriptionResponse":
        n = view.newsletter
        return cls(
            newsletter_id=n.id,
            title=n.title,
            category=n.category,
            author=n.author,
            published_at=n.published_at,
            subscribed_at=view.subscribed_at,
            can_unsubscribe=view.can_unsubscribe,
            cooldown_remaining_seconds=view.cooldown_remaining_seconds,
        )


class SubscribeResponse(BaseModel):
    newsletter_id: str
    subscribed_at: datetime | None
    cooldown_hours: int
