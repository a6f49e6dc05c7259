"""API v1 router aggregation.

Admin routers are mounted with require_admin so no admin route does its
own role check; subscriber routes depend on get_current_user.
"""

from fastapi import APIRouter, Depends

from newsecho.api.v1.dependencies import require_admin
from newsecho.api.v1.endpoints import (
    admin_dashboard,
    admin_newsletters,
    admin_replies,
    admin_uploads,
    admin_users,
    auth,
    health,
    newsletters,
    replies,
    settings,
    subscriptions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(newsletters.router, prefix="/newsletters", tags=["newsletters"])
api_router.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
api_router.include_router(replies.router, prefix="/replies", tags=["replies"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])

admin_router = APIRouter(dependencies=[Depends(require_admin)])
admin_router.include_router(admin_dashboard.router, prefix="/dashboard", tags=["admin"])
admin_router.include_router(admin_newsletters.router, prefix="/newsletters", tags=["admin"])
admin_router.include_router(admin_uploads.router, prefix="/uploads", tags=["admin"])
admin_router.include_router(admin_replies.router, prefix="/replies", tags=["admin"])
admin_router.include_router(admin_users.router, prefix="/users", tags=["admin"])

api_router.include_router(admin_router, prefix="/admin")
