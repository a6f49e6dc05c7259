"""Application services (one per feature area)."""

from newsecho.application.services.auth_service import AuthService
from newsecho.application.services.dashboard_service import (
    DASHBOARD_CACHE_KEY,
    DashboardService,
    invalidate_dashboard,
)
from newsecho.application.services.newsletter_service import NewsletterService
from newsecho.application.services.profile_settings_service import ProfileSettingsService
from newsecho.application.services.reply_service import ReplyService
from newsecho.application.services.subscription_service import (
    SubscriptionService,
    subscription_state,
)
from newsecho.application.services.user_admin_service import UserAdminService

__all__ = [
    "DASHBOARD_CACHE_KEY",
    "AuthService",
    "DashboardService",
    "NewsletterService",
    "ProfileSettingsService",
    "ReplyService",
    "SubscriptionService",
    "UserAdminService",
    "invalidate_dashboard",
    "subscription_state",
]
