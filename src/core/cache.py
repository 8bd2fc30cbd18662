"""Redis-backed query cache with namespace invalidation.

Listing endpoints read through :class:`QueryCache` and every mutation that
changes a listing calls :meth:`QueryCache.invalidate` with the namespace it
touched (``"appointments"``, ``"medicines"``, ...), so the next read goes back
to the database. Without ``REDIS_URL`` the cache is a pass-through.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from functools import lru_cache
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from .config import settings

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


class QueryCache:
    def __init__(self, client: redis.Redis | None, prefix: str = "medicare", ttl_seconds: int = 300):
        self.client = client
        self.prefix = prefix
        self.ttl_seconds = ttl_seconds

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def key(self, parts: Sequence[str]) -> str:
        return ":".join([self.prefix, *parts])

    async def remember(self, parts: Sequence[str], loader: Loader) -> Any:
        """Return the cached JSON value for ``parts`` or load and store it."""
        if self.client is None:
            return await loader()

        key = self.key(parts)
        try:
            cached = await self.client.get(key)
        except RedisError as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return await loader()
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return json.loads(cached)

        value = await loader()
        try:
            await self.client.set(key, json.dumps(value), ex=self.ttl_seconds)
        except RedisError as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)
        return value

    async def invalidate(self, namespace: str) -> int:
        """Drop every key under ``namespace``; returns the number of deleted keys."""
        if self.client is None:
            return 0

        pattern = self.key([namespace, "*"])
        try:
            keys = [key async for key in self.client.scan_iter(match=pattern)]
            deleted = await self.client.delete(*keys) if keys else 0
        except RedisError as exc:
            logger.warning("Cache invalidation failed for %s: %s", pattern, exc)
            return 0
        logger.debug("Invalidated %d cache keys for %s", deleted, namespace)
        return deleted


@lru_cache(1)
def get_query_cache() -> QueryCache:
    """FastAPI dependency returning the process-wide cache."""
    client = None
    if settings.redis_url:
        client = redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
    return QueryCache(client, prefix=settings.cache_prefix, ttl_seconds=settings.cache_ttl_seconds)
