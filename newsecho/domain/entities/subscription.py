"""Subscription: one row of the user x newsletter join collection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from newsecho.shared.utils.datetime import ensure_utc


def subscription_id(user_id: str, newsletter_id: str) -> str:
    """Deterministic document id; makes subscribe idempotent per user/newsletter."""
    return f"{user_id}_{newsletter_id}".replace("/", "_")


@dataclass(frozen=True)
class Subscription:
    user_id: str
    newsletter_id: str
    subscribed_at: datetime | None

    @property
    def id(self) -> str:
        return subscription_id(self.user_id, self.newsletter_id)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Subscription:
        subscribed_at = data.get("subscribedAt")
        return cls(
            user_id=data.get("userId") or "",
            newsletter_id=data.get("newsletterId") or "",
            subscribed_at=ensure_utc(subscribed_at) if isinstance(subscribed_at, datetime) else None,
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "newsletterId": self.newsletter_id,
            "subscribedAt": self.subscribed_at,
        }
