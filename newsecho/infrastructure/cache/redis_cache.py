"""Redis cache for derived read models (the admin dashboard summary).

Values are JSON with a TTL. The cache is best effort: when Redis is
disabled, unreachable or erroring, reads are misses and writes report False,
and the caller recomputes from Firestore.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from newsecho.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CONNECTION_ERRORS = (redis.ConnectionError, redis.TimeoutError)


class CacheService:
    """Async Redis cache. connect() on startup, disconnect() on shutdown.

    A client passed in (tests, DI) is used as-is and treated as connected.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        if self.redis is not None:
            return
        password = self.settings.redis_password
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except _CONNECTION_ERRORS as e:
            logger.warning("Redis unreachable at %s:%s (%s); caching disabled",
                           self.settings.redis_host, self.settings.redis_port, e)
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info("Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port)

    async def disconnect(self) -> None:
        if self.redis is None:
            return
        await self.redis.aclose()
        self.redis = None
        self._connected = False
        logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def _execute(
        self, action: str, key: str, command: Callable[[redis.Redis], Awaitable[T]]
    ) -> tuple[bool, T | None]:
        """Run one command, reconnecting once after a dropped connection.

        Returns (ok, result); ok is False when the command could not run.
        """
        if not self.is_available():
            return False, None
        try:
            return True, await command(self.redis)
        except _CONNECTION_ERRORS:
            logger.warning("Redis connection lost during %s %s; reconnecting", action, key)
        except redis.RedisError:
            logger.exception("Cache %s failed for key %s", action, key)
            return False, None

        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        if not self.is_available():
            return False, None
        try:
            return True, await command(self.redis)
        except redis.RedisError:
            logger.exception("Cache %s failed for key %s after reconnect", action, key)
            return False, None

    async def get(self, key: str) -> Any | None:
        """Cached JSON value, or None on a miss."""
        _, raw = await self._execute("get", key, lambda r: r.get(key))
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store a JSON-serializable value for ttl seconds."""
        payload = json.dumps(value)
        ok, _ = await self._execute("set", key, lambda r: r.setex(key, ttl, payload))
        if ok:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return ok

    async def delete(self, key: str) -> bool:
        ok, _ = await self._execute("delete", key, lambda r: r.delete(key))
        return ok
