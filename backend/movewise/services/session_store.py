"""Session profile store — keeps each conversation's UserProfile between turns.

Profiles live in Redis when it is reachable. A process-local copy with the
same TTL is always kept so a Redis outage does not reset the conversation.
"""

import logging
import time

from movewise.models.profile import UserProfile
from movewise.services.cache_service import TTL_SESSION_PROFILE, CacheService, cache_service

logger = logging.getLogger(__name__)


class SessionProfileStore:
    def __init__(self, cache: CacheService = cache_service, ttl_seconds: int = TTL_SESSION_PROFILE):
        self._cache = cache
        self._ttl = ttl_seconds
        self._local: dict[str, tuple[float, dict]] = {}

    async def load(self, session_id: str) -> UserProfile | None:
        """The stored profile, or None for a new or expired session."""
        data = await self._cache.get_profile(session_id)
        if data is None:
            data = self._local_get(session_id)
        return UserProfile.from_dict(data) if data else None

    async def save(self, session_id: str, profile: UserProfile) -> None:
        data = profile.to_dict()
        now = time.monotonic()
        self._local[session_id] = (now + self._ttl, data)
        self._sweep(now)
        await self._cache.set_profile(session_id, data, self._ttl)

    async def discard(self, session_id: str) -> bool:
        """End a session. True if a profile existed."""
        held_locally = self._local_get(session_id) is not None
        self._local.pop(session_id, None)
        held_remotely = await self._cache.delete_profile(session_id)
        existed = held_locally or held_remotely
        if existed:
            logger.info(f"Discarded profile for session {session_id}")
        return existed

    def _local_get(self, session_id: str) -> dict | None:
        entry = self._local.get(session_id)
        if entry is None:
            return None
        expires_at, data = entry
        if time.monotonic() > expires_at:
            del self._local[session_id]
            return None
        return data

    def _sweep(self, now: float) -> None:
        """Drop expired local entries, including sessions never loaded again."""
        expired = [sid for sid, (expires_at, _) in self._local.items() if now > expires_at]
        for sid in expired:
            del self._local[sid]
        if expired:
            logger.debug(f"Swept {len(expired)} expired session profiles")


session_store = SessionProfileStore()
