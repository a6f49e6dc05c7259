"""Profile and notification settings of the signed-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from newsecho.api.v1.dependencies import CurrentUser, get_profile_settings_service
from newsecho.application.services import ProfileSettingsService
from newsecho.core.limiter import limit_writes
from newsecho.schemas.settings import UserSettingsSchema

router = APIRouter()

ProfileSettings = Annotated[ProfileSettingsService, Depends(get_profile_settings_service)]


@router.get("", response_model=UserSettingsSchema)
async def get_settings_for_me(current_user: CurrentUser, service: ProfileSettings):
    return UserSettingsSchema.from_entity(service.get(current_user))


@router.put("", response_model=UserSettingsSchema)
@limit_writes
async def save_settings(
    request: Request, body: UserSettingsSchema, current_user: CurrentUser, service: ProfileSettings
):
    saved = await service.save(current_user, body.to_entity())
    return UserSettingsSchema.from_entity(saved)
