"""Auth API schemas."""

from typing import Literal

from pydantic import BaseModel, EmailStr, Field, model_validator

from newsecho.domain.entities import UserProfile
from newsecho.domain.enums import UserRole


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    password_confirm: str = Field(..., description="Must equal password")

    @model_validator(mode="after")
    def passwords_match(self) -> "SignUpRequest":
        if self.password != self.password_confirm:
            raise ValueError("Passwords do not match")
        return self


class SignUpResponse(BaseModel):
    uid: str
    email: str
    verification_sent: bool
    message: str = "Account created. Please check your email to verify your account."


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class FederatedLoginRequest(BaseModel):
    """Sign in with an id token obtained from a federated provider (Google)."""

    provider_id: Literal["google.com"] = "google.com"
    id_token: str = Field(..., min_length=1)


class SendVerificationRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class VerifyEmailRequest(BaseModel):
    oob_code: str = Field(..., min_length=1, description="Code from the verification link")


class PasswordResetRequest(BaseModel):
    email: EmailStr


class MessageResponse(BaseModel):
    message: str


class CurrentUserResponse(BaseModel):
    id: str
    email: str
    role: UserRole
    display_name: str | None = None
    enabled: bool

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "CurrentUserResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            role=profile.role,
            display_name=profile.display_name,
            enabled=profile.enabled,
        )


class SessionResponse(BaseModel):
    """Bearer token plus the landing route for the user's role."""

    access_token: str
    token_type: str = "bearer"
    redirect_to: str
    user: CurrentUserResponse
