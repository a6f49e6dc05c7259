"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (document store, identity provider, shared
HTTP client, cache, telemetry); no business logic here.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from newsecho.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client and image host, document store, Redis cache (if
    enabled), telemetry (if enabled). Shutdown runs in reverse.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client; the image host borrows it.
    app.state.http_client = httpx.AsyncClient(timeout=60.0)

    from newsecho.infrastructure.external.images import create_image_host

    app.state.image_host = create_image_host(settings, http_client=app.state.http_client)
    if app.state.image_host is None:
        logger.info("Cloudinary not configured; image uploads will return 503")

    from newsecho.infrastructure.firebase.client import init_firebase

    if not init_firebase():
        logger.warning("Document store not initialized; data endpoints will return 503")

    if settings.redis_enabled:
        from newsecho.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None

    if settings.telemetry_enabled:
        from newsecho.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(settings)
        telemetry.setup_telemetry()
        telemetry.instrument(app, redis=app.state.cache is not None)
        set_telemetry(telemetry)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    from newsecho.infrastructure.firebase.client import close_firebase
    from newsecho.infrastructure.identity import close_identity_provider

    await close_identity_provider()
    await close_firebase()

    app.state.image_host = None
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Shared HTTP client closed")

    from newsecho.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
