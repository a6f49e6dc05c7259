"""Newsletter domain entity.

Raw store documents are normalized here once; read sites never apply
their own defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from newsecho.domain.enums import NewsletterStatus
from newsecho.domain.exceptions import ValidationException
from newsecho.shared.utils.datetime import ensure_utc

DEFAULT_TITLE = "Untitled"
DEFAULT_CATEGORY = "General"
DEFAULT_AUTHOR = "Unknown"


def _status(raw: Any) -> NewsletterStatus:
    try:
        return NewsletterStatus(raw)
    except ValueError:
        return NewsletterStatus.DRAFT


def _as_datetime(raw: Any) -> datetime | None:
    return ensure_utc(raw) if isinstance(raw, datetime) else None


@dataclass
class Newsletter:
    """A newsletter issue authored in the admin console."""

    id: str
    title: str
    content: str
    status: NewsletterStatus = NewsletterStatus.DRAFT
    category: str = DEFAULT_CATEGORY
    author: str = DEFAULT_AUTHOR
    image_url: str | None = None
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.status == NewsletterStatus.PUBLISHED

    @property
    def activity_date(self) -> datetime | None:
        """Date the dashboard buckets this newsletter by (publish date, else creation)."""
        return self.published_at or self.created_at

    def validate(self) -> None:
        """Title and content must be non-blank. Raises ValidationException."""
        if not self.title or not self.title.strip():
            raise ValidationException("Title and content are required", field="title")
        if not self.content or not self.content.strip():
            raise ValidationException("Title and content are required", field="content")

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Newsletter:
        """Build from a stored document, applying defaults for missing fields."""
        created_at = _as_datetime(data.get("createdAt"))
        return cls(
            id=doc_id,
            title=data.get("title") or DEFAULT_TITLE,
            content=data.get("content") or "",
            status=_status(data.get("status")),
            category=data.get("category") or DEFAULT_CATEGORY,
            author=data.get("author") or DEFAULT_AUTHOR,
            image_url=data.get("imageUrl") or None,
            published_at=_as_datetime(data.get("publishedAt")),
            created_at=created_at,
            updated_at=_as_datetime(data.get("updatedAt")) or created_at,
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "status": self.status.value,
            "category": self.category,
            "author": self.author,
            "imageUrl": self.image_url,
            "publishedAt": self.published_at,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class NewsletterCounts:
    """Counts derived from the subscriptions and replies collections."""

    subscribers: int = 0
    replies: int = 0


@dataclass
class NewsletterDraft:
    """Fields an admin submits when creating or editing a newsletter."""

    title: str
    content: str
    status: NewsletterStatus
    category: str | None = None
    author: str | None = None
    image_url: str | None = None
