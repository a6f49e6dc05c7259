"""Subscriber-facing newsletters: browse published issues and (un)subscribe."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from newsecho.api.v1.dependencies import (
    AppSettings,
    CurrentUser,
    get_newsletter_service,
    get_subscription_service,
)
from newsecho.application.services import NewsletterService, SubscriptionService
from newsecho.core.limiter import limit_writes
from newsecho.schemas.newsletter import SubscribeResponse, SubscriberNewsletterResponse

router = APIRouter()

Newsletters = Annotated[NewsletterService, Depends(get_newsletter_service)]
Subscriptions = Annotated[SubscriptionService, Depends(get_subscription_service)]


@router.get("", response_model=list[SubscriberNewsletterResponse])
async def list_published(current_user: CurrentUser, newsletters: Newsletters):
    """Published newsletters with the caller's subscription state and derived counts."""
    views = await newsletters.list_published(current_user.id)
    return [SubscriberNewsletterResponse.from_view(v) for v in views]


@router.get("/{newsletter_id}", response_model=SubscriberNewsletterResponse)
async def get_published(newsletter_id: str, current_user: CurrentUser, newsletters: Newsletters):
    """A single published newsletter (drafts return 404)."""
    return SubscriberNewsletterResponse.from_view(
        await newsletters.get_published(newsletter_id, current_user.id)
    )


@router.post("/{newsletter_id}/subscription", response_model=SubscribeResponse, status_code=201)
@limit_writes
async def subscribe(
    request: Request,
    newsletter_id: str,
    current_user: CurrentUser,
    subscriptions: Subscriptions,
    settings: AppSettings,
):
    subscription = await subscriptions.subscribe(current_user.id, newsletter_id)
    return SubscribeResponse(
        newsletter_id=newsletter_id,
        subscribed_at=subscription.subscribed_at,
        cooldown_hours=settings.unsubscribe_cooldown_hours,
    )


@router.delete("/{newsletter_id}/subscription", status_code=204)
@limit_writes
async def unsubscribe(
    request: Request,
    newsletter_id: str,
    current_user: CurrentUser,
    subscriptions: Subscriptions,
):
    """Unsubscribe; 409 SUBSCRIPTION_COOLDOWN (with remaining_seconds) inside the cooldown."""
    await subscriptions.unsubscribe(current_user.id, newsletter_id)
    return Response(status_code=204)
