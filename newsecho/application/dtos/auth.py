"""DTOs for auth use cases."""

from dataclasses import dataclass

from newsecho.domain.entities import UserProfile


@dataclass(frozen=True)
class SignUpResult:
    uid: str
    email: str
    verification_sent: bool


@dataclass(frozen=True)
class SessionResult:
    """Issued session: bearer token plus where the client should land."""

    access_token: str
    profile: UserProfile
    redirect_to: str
    token_type: str = "bearer"
