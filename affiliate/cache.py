"""Redis client and the idempotency-key set used by backfills."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import redis.asyncio as redis

from .config import settings

logger = logging.getLogger(__name__)

_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Return the process-wide Redis client, creating it lazily."""
    global _client
    if _client is None:
        _client = redis.from_url(settings.redis_url, decode_responses=True)
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


class DedupSet:
    """Membership store for keys whose side effects were already recorded.

    Backed by a single Redis set. Check-then-add is not transactional: two
    concurrent callers may both see a key as absent.
    """

    def __init__(self, client: redis.Redis, key: str) -> None:
        self._client = client
        self.key = key

    async def contains_many(self, members: Sequence[str]) -> list[bool]:
        if not members:
            return []
        flags = await self._client.smismember(self.key, list(members))
        return [bool(f) for f in flags]

    async def add_many(self, members: Iterable[str]) -> int:
        members = list(members)
        if not members:
            return 0
        added = await self._client.sadd(self.key, *members)
        logger.debug("Added %d/%d members to %s", added, len(members), self.key)
        return added


def get_backfill_dedup_set() -> DedupSet:
    """FastAPI dependency for the lead-backfill dedup set."""
    return DedupSet(get_redis(), settings.backfill_cache_key)
