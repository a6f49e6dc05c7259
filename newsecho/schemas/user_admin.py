"""Admin user management API schemas."""

from datetime import datetime

from pydantic import BaseModel

from newsecho.application.dtos.user_admin import ManagedUser, ManagedUserList


class ManagedUserResponse(BaseModel):
    id: str
    name: str
    email: str
    enabled: bool
    created_at: datetime | None
    last_active: datetime | None
    is_subscribed: bool
    subscribed_newsletters: list[str]
    reply_count: int

    @classmethod
    def from_managed(cls, m: ManagedUser) -> "ManagedUserResponse":
        p = m.profile
        return cls(
            id=p.id,
            name=p.name,
            email=p.email,
            enabled=p.enabled,
            created_at=p.created_at,
            last_active=p.last_active,
            is_subscribed=m.is_subscribed,
            subscribed_newsletters=m.subscribed_newsletters,
            reply_count=m.reply_count,
        )


class ManagedUserListResponse(BaseModel):
    users: list[ManagedUserResponse]
    total: int
    subscribed: int

    @classmethod
    def from_list(cls, result: ManagedUserList) -> "ManagedUserListResponse":
        return cls(
            users=[ManagedUserResponse.from_managed(m) for m in result.users],
            total=result.total,
            subscribed=result.subscribed,
        )


class UserStatusUpdate(BaseModel):
    enabled: bool


class UserStatusResponse(BaseModel):
    id: str
    enabled: bool
