"""Auth API: sign-up, sign-in (password and federated), verification, reset, sign-out, me.

Provider errors surface as IDENTITY_PROVIDER_ERROR with a friendly message;
sessions are only issued to verified, enabled accounts.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from newsecho.api.v1.dependencies import (
    CurrentUser,
    get_auth_service,
    get_current_user_optional,
)
from newsecho.application.dtos.auth import SessionResult
from newsecho.application.services import AuthService
from newsecho.core.limiter import limit_auth
from newsecho.domain.entities import UserProfile
from newsecho.schemas.auth import (
    CurrentUserResponse,
    FederatedLoginRequest,
    LoginRequest,
    MessageResponse,
    PasswordResetRequest,
    SendVerificationRequest,
    SessionResponse,
    SignUpRequest,
    SignUpResponse,
    VerifyEmailRequest,
)

router = APIRouter()

Auth = Annotated[AuthService, Depends(get_auth_service)]


def _session_response(session: SessionResult) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        token_type=session.token_type,
        redirect_to=session.redirect_to,
        user=CurrentUserResponse.from_profile(session.profile),
    )


@router.post("/signup", response_model=SignUpResponse, status_code=201)
@limit_auth
async def signup(request: Request, body: SignUpRequest, auth: Auth):
    """Create an account and send the verification e-mail. No session is issued."""
    result = await auth.sign_up(body.email, body.password)
    return SignUpResponse(
        uid=result.uid, email=result.email, verification_sent=result.verification_sent
    )


@router.post("/login", response_model=SessionResponse)
@limit_auth
async def login(request: Request, body: LoginRequest, auth: Auth):
    """Sign in with e-mail and password; 403 EMAIL_NOT_VERIFIED until verified."""
    return _session_response(await auth.sign_in(body.email, body.password))


@router.post("/federated", response_model=SessionResponse)
@limit_auth
async def federated_login(request: Request, body: FederatedLoginRequest, auth: Auth):
    """Sign in with a Google id token."""
    return _session_response(await auth.sign_in_federated(body.provider_id, body.id_token))


@router.post("/send-verification", response_model=MessageResponse)
@limit_auth
async def send_verification(request: Request, body: SendVerificationRequest, auth: Auth):
    """Resend the verification e-mail (credentials required)."""
    sent = await auth.send_verification(body.email, body.password)
    if not sent:
        return MessageResponse(message="Email is already verified. You can log in.")
    return MessageResponse(message="Verification email sent. Please check your inbox.")


@router.post("/verify-email", response_model=MessageResponse)
@limit_auth
async def verify_email(request: Request, body: VerifyEmailRequest, auth: Auth):
    await auth.verify_email(body.oob_code)
    return MessageResponse(message="Email verified successfully! You can now log in.")


@router.post("/reset-password", response_model=MessageResponse)
@limit_auth
async def reset_password(request: Request, body: PasswordResetRequest, auth: Auth):
    await auth.send_password_reset(body.email)
    return MessageResponse(message="Password reset email sent. Please check your inbox.")


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: Auth,
    current_user: Annotated[UserProfile | None, Depends(get_current_user_optional)],
):
    """Stateless sign-out; the client discards its token."""
    await auth.sign_out(current_user.id if current_user else None)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(current_user: CurrentUser):
    return CurrentUserResponse.from_profile(current_user)
