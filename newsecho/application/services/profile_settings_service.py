"""Profile and notification settings for the signed-in user."""

from __future__ import annotations

from newsecho.application.interfaces import IUserRepository
from newsecho.domain.entities import UserProfile, UserSettings
from newsecho.domain.exceptions import ResourceNotFoundException
from newsecho.shared.utils import InputSanitizer


class ProfileSettingsService:
    def __init__(self, users: IUserRepository) -> None:
        self._users = users

    def get(self, profile: UserProfile) -> UserSettings:
        """Stored settings with the account e-mail and display name as fallbacks."""
        settings = profile.settings
        if not settings.email:
            settings.email = profile.email
        if not settings.full_name and profile.display_name:
            settings.full_name = profile.display_name
        return settings

    async def save(self, profile: UserProfile, settings: UserSettings) -> UserSettings:
        settings.full_name = InputSanitizer.sanitize_text(settings.full_name).strip()
        settings.bio = InputSanitizer.sanitize_text(settings.bio).strip()
        settings.email = settings.email.strip() or profile.email
        fields = {
            "settings": settings.to_document(),
            "displayName": settings.full_name or profile.display_name,
        }
        if not await self._users.update_fields(profile.id, fields):
            raise ResourceNotFoundException("user", profile.id)
        profile.settings = settings
        return settings
