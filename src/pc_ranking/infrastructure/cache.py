"""Leaderboard cache — cache-aside over Redis.

Read: check cache -> DB on miss -> populate with TTL.
Write: the rank recompute invalidates every cached page after it commits.
Key: f"leaderboard:{tier or 'all'}:{limit}"

Redis outages degrade to direct DB reads; they never fail a request.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings
from src.pc_common.redis_client import get_redis

logger = logging.getLogger(__name__)

_KEY_PREFIX = "leaderboard:"


def cache_key(limit: int, tier: str | None) -> str:
    return f"{_KEY_PREFIX}{tier or 'all'}:{limit}"


class LeaderboardCache:
    def __init__(self, client: aioredis.Redis | None = None) -> None:
        self._client = client

    async def _redis(self) -> aioredis.Redis:
        return self._client or await get_redis()

    async def get(self, limit: int, tier: str | None) -> str | None:
        try:
            return await (await self._redis()).get(cache_key(limit, tier))
        except RedisError as e:
            logger.warning("Leaderboard cache read failed: %s", e)
            return None

    async def set(self, limit: int, tier: str | None, payload: str) -> None:
        try:
            await (await self._redis()).set(
                cache_key(limit, tier), payload, ex=settings.LEADERBOARD_CACHE_TTL_SECONDS
            )
        except RedisError as e:
            logger.warning("Leaderboard cache write failed: %s", e)

    async def invalidate(self) -> int:
        """Drop every cached page; returns the number of keys removed."""
        try:
            client = await self._redis()
            keys = [k async for k in client.scan_iter(match=f"{_KEY_PREFIX}*")]
            if keys:
                await client.delete(*keys)
            return len(keys)
        except RedisError as e:
            logger.warning("Leaderboard cache invalidation failed: %s", e)
            return 0
