"""Profile settings API schemas (mirror the stored settings map)."""

from pydantic import BaseModel, Field

from newsecho.domain.entities import NotificationSettings, ReplySettings, UserSettings


class NotificationSettingsSchema(BaseModel):
    new_subscribers: bool = True
    reply_notifications: bool = True
    weekly_summary: bool = False


class ReplySettingsSchema(BaseModel):
    auto_mark_as_read: bool = False


class UserSettingsSchema(BaseModel):
    full_name: str = Field(default="", max_length=200)
    email: str = Field(default="", max_length=320)
    bio: str = Field(default="", max_length=2000)
    notifications: NotificationSettingsSchema = Field(default_factory=NotificationSettingsSchema)
    reply_settings: ReplySettingsSchema = Field(default_factory=ReplySettingsSchema)

    @classmethod
    def from_entity(cls, settings: UserSettings) -> "UserSettingsSchema":
        return cls.model_validate(settings.to_dict())

    def to_entity(self) -> UserSettings:
        return UserSettings(
            full_name=self.full_name,
            email=self.email,
            bio=self.bio,
            notifications=NotificationSettings(**self.notifications.model_dump()),
            reply_settings=ReplySettings(**self.reply_settings.model_dump()),
        )
