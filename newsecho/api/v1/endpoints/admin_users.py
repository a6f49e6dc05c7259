"""Admin user management: list subscribers, enable/disable, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from newsecho.api.v1.dependencies import get_user_admin_service
from newsecho.application.services import UserAdminService
from newsecho.core.limiter import limit_writes
from newsecho.domain.enums import UserSubscriptionFilter
from newsecho.schemas.user_admin import (
    ManagedUserListResponse,
    UserStatusResponse,
    UserStatusUpdate,
)

router = APIRouter()

Users = Annotated[UserAdminService, Depends(get_user_admin_service)]


@router.get("", response_model=ManagedUserListResponse)
async def list_users(
    users: Users,
    search: Annotated[str | None, Query(max_length=200)] = None,
    status: UserSubscriptionFilter = UserSubscriptionFilter.ALL,
):
    return ManagedUserListResponse.from_list(
        await users.list_users(search=search, subscription_filter=status)
    )


@router.patch("/{user_id}", response_model=UserStatusResponse)
@limit_writes
async def update_user_status(
    request: Request, user_id: str, body: UserStatusUpdate, users: Users
):
    """Enable or disable a user. Disabled users cannot sign in or use their session."""
    profile = await users.set_enabled(user_id, body.enabled)
    return UserStatusResponse(id=profile.id, enabled=profile.enabled)


@router.delete("/{user_id}", status_code=204)
@limit_writes
async def delete_user(request: Request, user_id: str, users: Users):
    await users.delete(user_id)
    return Response(status_code=204)
