"""
Thin async Redis wrapper storing JSON values
"""
import json
from typing import Any, Optional
import logging

import redis.asyncio as redis

from app.core.config import settings

logger = logging.getLogger(__name__)


class RedisCache:
    """JSON get/set on top of redis.asyncio"""

    def __init__(self, url: Optional[str] = None, client: Optional[redis.Redis] = None):
        self.url = url or settings.REDIS_URL
        self._client = client

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self.url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> Optional[Any]:
        """Return the decoded value, or None on miss or Redis failure"""
        try:
            raw = await self._get_client().get(key)
        except redis.RedisError as e:
            logger.warning(f"Redis get failed for {key}: {e}")
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        try:
            await self._get_client().set(key, json.dumps(value), ex=ttl)
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis set failed for {key}: {e}")
            return False

    async def delete(self, key: str) -> None:
        try:
            await self._get_client().delete(key)
        except redis.RedisError as e:
            logger.warning(f"Redis delete failed for {key}: {e}")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
