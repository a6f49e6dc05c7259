"""The caller's subscriptions."""

from typing import Annotated

from fastapi import APIRouter, Depends

from newsecho.api.v1.dependencies import CurrentUser, get_subscription_service
from newsecho.application.services import SubscriptionService
from newsecho.schemas.newsletter import SubscriptionResponse

router = APIRouter()


@router.get("", response_model=list[SubscriptionResponse])
async def list_my_subscriptions(
    current_user: CurrentUser,
    subscriptions: Annotated[SubscriptionService, Depends(get_subscription_service)],
):
    views = await subscriptions.list_for_user(current_user.id)
    return [SubscriptionResponse.from_view(v) for v in views]
