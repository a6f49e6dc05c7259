"""Admin dashboard summary."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class MetricSummary:
    total: int
    current_period: int
    previous_period: int
    growth: float


@dataclass(frozen=True)
class NewsletterDigest:
    id: str
    title: str
    status: str
    category: str
    date: datetime | None
    subscribers: int
    replies: int


@dataclass(frozen=True)
class DashboardSummary:
    newsletters: MetricSummary
    subscribers: MetricSummary
    replies: MetricSummary
    last_published: NewsletterDigest | None
    recent_newsletters: list[NewsletterDigest]
    engagement_series: list[int]
    engagement_labels: list[str]
    engagement_growth: float
    generated_at: datetime

    def to_cache(self) -> dict[str, Any]:
        """JSON-safe dict (datetimes as ISO strings) for the cache."""
        data = asdict(self)
        data["generated_at"] = self.generated_at.isoformat()
        for digest in [data["last_published"], *data["recent_newsletters"]]:
            if digest and digest["date"] is not None:
                digest["date"] = digest["date"].isoformat()
        return data

    @classmethod
    def from_cache(cls, data: dict[str, Any]) -> DashboardSummary:
        def digest(d: dict | None) -> NewsletterDigest | None:
            if d is None:
                return None
            date = datetime.fromisoformat(d["date"]) if d.get("date") else None
            return NewsletterDigest(**{**d, "date": date})

        return cls(
            newsletters=MetricSummary(**data["newsletters"]),
            subscribers=MetricSummary(**data["subscribers"]),
            replies=MetricSummary(**data["replies"]),
            last_published=digest(data["last_published"]),
            recent_newsletters=[digest(d) for d in data["recent_newsletters"]],
            engagement_series=list(data["engagement_series"]),
            engagement_labels=list(data["engagement_labels"]),
            engagement_growth=data["engagement_growth"],
            generated_at=datetime.fromisoformat(data["generated_at"]),
        )
