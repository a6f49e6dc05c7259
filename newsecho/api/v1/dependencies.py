"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store, identity provider, image
host and application services. Routes depend only on these, never on
infrastructure directly. Authorization is centralized here: get_current_user
(valid session, enabled profile) and require_admin (admin role).

Backends are chosen by DATABASE_BACKEND / AUTH_BACKEND; tests override
get_document_store and get_identity_provider with in-memory instances.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from newsecho.application.interfaces import ICacheService, IIdentityProvider, IImageHost
from newsecho.application.services import (
    AuthService,
    DashboardService,
    NewsletterService,
    ProfileSettingsService,
    ReplyService,
    SubscriptionService,
    UserAdminService,
)
from newsecho.core.config import Settings, get_settings
from newsecho.domain.entities import UserProfile
from newsecho.domain.enums import UserRole
from newsecho.domain.exceptions import (
    AccountDisabledException,
    AuthenticationException,
    AuthorizationException,
    StoreNotConfiguredException,
)
from newsecho.infrastructure.firebase._rest_client import FirestoreRESTClient
from newsecho.infrastructure.firebase.client import get_firestore_client, init_firebase
from newsecho.infrastructure.firebase.repositories import (
    FirestoreNewsletterRepository,
    FirestoreReplyRepository,
    FirestoreSubscriptionRepository,
    FirestoreUserRepository,
)
from newsecho.infrastructure.identity import get_identity_provider as _get_identity_provider
from newsecho.infrastructure.memory.store import InMemoryDocumentStore
from newsecho.infrastructure.security.jwt import create_access_token, verify_token

logger = logging.getLogger(__name__)

DocumentStore = FirestoreRESTClient | InMemoryDocumentStore

_http_bearer = HTTPBearer(auto_error=False)


def get_document_store() -> DocumentStore:
    """Return the document store, initializing it on first use; 503 if unavailable."""
    client = get_firestore_client()
    if client is None and init_firebase():
        client = get_firestore_client()
    if client is None:
        raise StoreNotConfiguredException()
    return client


def get_identity_provider() -> IIdentityProvider:
    return _get_identity_provider()


def get_cache(request: Request) -> ICacheService | None:
    """Redis cache from app.state (None when disabled or not started)."""
    return getattr(request.app.state, "cache", None)


def get_image_host(request: Request) -> IImageHost:
    """Cloudinary host built at startup; 503 when uploads are not configured."""
    image_host = getattr(request.app.state, "image_host", None)
    if image_host is None:
        raise HTTPException(
            status_code=503,
            detail="Image uploads require CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET",
        )
    return image_host


Store = Annotated[DocumentStore, Depends(get_document_store)]
Cache = Annotated[ICacheService | None, Depends(get_cache)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_user_repo(store: Store) -> FirestoreUserRepository:
    return FirestoreUserRepository(store)


def get_newsletter_repo(store: Store) -> FirestoreNewsletterRepository:
    return FirestoreNewsletterRepository(store)


def get_subscription_repo(store: Store) -> FirestoreSubscriptionRepository:
    return FirestoreSubscriptionRepository(store)


def get_reply_repo(store: Store) -> FirestoreReplyRepository:
    return FirestoreReplyRepository(store)


UserRepo = Annotated[FirestoreUserRepository, Depends(get_user_repo)]
NewsletterRepo = Annotated[FirestoreNewsletterRepository, Depends(get_newsletter_repo)]
SubscriptionRepo = Annotated[FirestoreSubscriptionRepository, Depends(get_subscription_repo)]
ReplyRepo = Annotated[FirestoreReplyRepository, Depends(get_reply_repo)]


def _issue_session_token(profile: UserProfile) -> str:
    return create_access_token(profile.id, profile.email, profile.role.value)


# ---- Auth ----


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    users: UserRepo,
) -> UserProfile | None:
    """Return the profile behind a valid bearer token; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    return await users.get(payload["sub"])


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    current_user: Annotated[UserProfile | None, Depends(get_current_user_optional)],
) -> UserProfile:
    """Return the signed-in, enabled user; 401 without a valid session, 403 if disabled."""
    if current_user is None:
        message = "Invalid or expired session" if credentials else "Not authenticated"
        raise AuthenticationException(message)
    if not current_user.enabled:
        raise AccountDisabledException()
    return current_user


async def require_admin(
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    """Return the current user if they hold the admin role; else 403."""
    if not current_user.is_admin:
        logger.info("Non-admin %s denied admin route", current_user.id)
        raise AuthorizationException(required_role=UserRole.ADMIN.value)
    return current_user


CurrentUser = Annotated[UserProfile, Depends(get_current_user)]
AdminUser = Annotated[UserProfile, Depends(require_admin)]


# ---- Services ----


def get_auth_service(
    identity: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    users: UserRepo,
    settings: AppSettings,
) -> AuthService:
    return AuthService(
        identity,
        users,
        issue_token=_issue_session_token,
        admin_emails=settings.admin_email_set,
    )


def get_newsletter_service(
    newsletters: NewsletterRepo,
    subscriptions: SubscriptionRepo,
    replies: ReplyRepo,
    cache: Cache,
    settings: AppSettings,
) -> NewsletterService:
    return NewsletterService(
        newsletters,
        subscriptions,
        replies,
        cache,
        cooldown_hours=settings.unsubscribe_cooldown_hours,
    )


def get_subscription_service(
    newsletters: NewsletterRepo,
    subscriptions: SubscriptionRepo,
    cache: Cache,
    settings: AppSettings,
) -> SubscriptionService:
    return SubscriptionService(
        newsletters,
        subscriptions,
        cache,
        cooldown_hours=settings.unsubscribe_cooldown_hours,
    )


def get_reply_service(
    replies: ReplyRepo,
    newsletters: NewsletterRepo,
    subscriptions: SubscriptionRepo,
    cache: Cache,
    settings: AppSettings,
) -> ReplyService:
    return ReplyService(
        replies,
        newsletters,
        subscriptions,
        cache,
        max_length=settings.reply_max_length,
    )


def get_dashboard_service(
    newsletters: NewsletterRepo,
    users: UserRepo,
    replies: ReplyRepo,
    subscriptions: SubscriptionRepo,
    cache: Cache,
    settings: AppSettings,
) -> DashboardService:
    return DashboardService(
        newsletters,
        users,
        replies,
        subscriptions,
        cache,
        cache_ttl=settings.cache_ttl_dashboard,
        growth_window_days=settings.growth_window_days,
        engagement_days=settings.engagement_window_days,
        recent_limit=settings.recent_newsletters_limit,
    )


def get_user_admin_service(
    users: UserRepo,
    subscriptions: SubscriptionRepo,
    replies: ReplyRepo,
    newsletters: NewsletterRepo,
    cache: Cache,
) -> UserAdminService:
    return UserAdminService(users, subscriptions, replies, newsletters, cache)


def get_profile_settings_service(users: UserRepo) -> ProfileSettingsService:
    return ProfileSettingsService(users)
