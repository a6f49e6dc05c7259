"""Redis cache (optional; disabled unless REDIS_ENABLED)."""

from newsecho.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService"]
