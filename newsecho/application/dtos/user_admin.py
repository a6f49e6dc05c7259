"""Read models for admin user management."""

from dataclasses import dataclass

from newsecho.domain.entities import UserProfile


@dataclass(frozen=True)
class ManagedUser:
    profile: UserProfile
    subscribed_newsletters: list[str]
    reply_count: int

    @property
    def is_subscribed(self) -> bool:
        return bool(self.subscribed_newsletters)


@dataclass(frozen=True)
class ManagedUserList:
    users: list[ManagedUser]
    total: int
    subscribed: int
