"""Redis cache for per-session conversation state.

Values are stored as JSON under namespaced keys ("movewise:profile:<session>").
Redis is optional: when it is disabled or unreachable every read is a miss and
every write reports False, so callers keep working from their local copy.
"""

import json
import logging
import time
from typing import Any

import redis.asyncio as redis

from movewise.config import settings

logger = logging.getLogger(__name__)

KEY_NAMESPACE = "movewise"
KIND_PROFILE = "profile"

# TTLs in seconds
TTL_SESSION_PROFILE = settings.session_profile_ttl_seconds

# After a failed connect, wait this long before trying Redis again
RECONNECT_BACKOFF_SECONDS = 30.0


class CacheService:
    def __init__(self, url: str | None = None, enabled: bool | None = None):
        self._url = url or settings.redis_url
        self._enabled = settings.cache_enabled if enabled is None else enabled
        self._redis: redis.Redis | None = None
        self._retry_at = 0.0

    @staticmethod
    def key(kind: str, ident: str) -> str:
        return f"{KEY_NAMESPACE}:{kind}:{ident}"

    async def _client(self) -> redis.Redis | None:
        if not self._enabled:
            return None
        if self._redis is not None:
            return self._redis
        if time.monotonic() < self._retry_at:
            return None

        client = redis.from_url(self._url, encoding="utf-8", decode_responses=True)
        try:
            await client.ping()
        except Exception as e:
            logger.warning(
                f"Redis at {self._url} unreachable, using local session state "
                f"for {RECONNECT_BACKOFF_SECONDS:.0f}s: {e}"
            )
            self._retry_at = time.monotonic() + RECONNECT_BACKOFF_SECONDS
            await client.aclose()
            return None

        self._redis = client
        return client

    async def get_json(self, key: str) -> Any | None:
        r = await self._client()
        if r is None:
            return None
        try:
            raw = await r.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        return json.loads(raw) if raw is not None else None

    async def set_json(self, key: str, value: Any, ttl: int) -> bool:
        r = await self._client()
        if r is None:
            return False
        try:
            await r.set(key, json.dumps(value), ex=ttl)
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            return False
        return True

    async def delete(self, key: str) -> bool:
        """True if Redis held the key."""
        r = await self._client()
        if r is None:
            return False
        try:
            return bool(await r.delete(key))
        except Exception as e:
            logger.warning(f"Cache delete failed for {key}: {e}")
            return False

    # Session profiles

    async def get_profile(self, session_id: str) -> dict | None:
        return await self.get_json(self.key(KIND_PROFILE, session_id))

    async def set_profile(self, session_id: str, data: dict, ttl: int = TTL_SESSION_PROFILE) -> bool:
        return await self.set_json(self.key(KIND_PROFILE, session_id), data, ttl)

    async def delete_profile(self, session_id: str) -> bool:
        return await self.delete(self.key(KIND_PROFILE, session_id))

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None


cache_service = CacheService()
