"""Admin dashboard API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MetricSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    current_period: int
    previous_period: int
    growth: float


class NewsletterDigestSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status: str
    category: str
    date: datetime | None
    subscribers: int
    replies: int


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    newsletters: MetricSummarySchema
    subscribers: MetricSummarySchema
    replies: MetricSummarySchema
    last_published: NewsletterDigestSchema | None
    recent_newsletters: list[NewsletterDigestSchema]
    engagement_series: list[int]
    engagement_labels: list[str]
    engagement_growth: float
    generated_at: datetime
