"""User profile domain entity (role, enabled flag, admin settings)."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from newsecho.domain.enums import UserRole
from newsecho.shared.utils.datetime import ensure_utc


@dataclass
class NotificationSettings:
    new_subscribers: bool = True
    reply_notifications: bool = True
    weekly_summary: bool = False


@dataclass
class ReplySettings:
    auto_mark_as_read: bool = False


@dataclass
class UserSettings:
    """Profile and notification preferences edited on the settings page."""

    full_name: str = ""
    email: str = ""
    bio: str = ""
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    reply_settings: ReplySettings = field(default_factory=ReplySettings)

    @classmethod
    def from_document(cls, data: dict[str, Any] | None, email: str = "") -> UserSettings:
        data = data or {}
        notifications = data.get("notifications") or {}
        reply_settings = data.get("replySettings") or {}
        return cls(
            full_name=data.get("fullName") or "",
            email=data.get("email") or email,
            bio=data.get("bio") or "",
            notifications=NotificationSettings(
                new_subscribers=bool(notifications.get("newSubscribers", True)),
                reply_notifications=bool(notifications.get("replyNotifications", True)),
                weekly_summary=bool(notifications.get("weeklySummary", False)),
            ),
            reply_settings=ReplySettings(
                auto_mark_as_read=bool(reply_settings.get("autoMarkAsRead", False)),
            ),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "fullName": self.full_name,
            "email": self.email,
            "bio": self.bio,
            "notifications": {
                "newSubscribers": self.notifications.new_subscribers,
                "replyNotifications": self.notifications.reply_notifications,
                "weeklySummary": self.notifications.weekly_summary,
            },
            "replySettings": {"autoMarkAsRead": self.reply_settings.auto_mark_as_read},
        }

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _role(raw: Any) -> UserRole:
    try:
        return UserRole(raw)
    except ValueError:
        return UserRole.USER


@dataclass
class UserProfile:
    """Profile document keyed by the identity provider uid."""

    id: str
    email: str
    role: UserRole = UserRole.USER
    enabled: bool = True
    display_name: str | None = None
    created_at: datetime | None = None
    last_active: datetime | None = None
    settings: UserSettings = field(default_factory=UserSettings)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def name(self) -> str:
        """Name shown in admin lists and on replies."""
        return self.display_name or self.settings.full_name or "Unknown"

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> UserProfile:
        email = data.get("email") or ""
        created = data.get("createdAt")
        last_active = data.get("lastActive")
        return cls(
            id=doc_id,
            email=email,
            role=_role(data.get("role")),
            enabled=data.get("enabled", True) is not False,
            display_name=data.get("displayName") or data.get("name") or None,
            created_at=ensure_utc(created) if isinstance(created, datetime) else None,
            last_active=ensure_utc(last_active) if isinstance(last_active, datetime) else None,
            settings=UserSettings.from_document(data.get("settings"), email=email),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "email": self.email,
            "role": self.role.value,
            "enabled": self.enabled,
            "displayName": self.display_name,
            "createdAt": self.created_at,
            "lastActive": self.last_active,
            "settings": self.settings.to_document(),
        }
