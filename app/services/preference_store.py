import logging
from typing import Optional, List, Dict, Union
from redis import asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

StoredValue = Union[str, List[str]]


class PreferenceStore:
    """
    Flat key-value store holding strings and string lists.

    This base class keeps everything in process memory; it is used directly in
    tests and when no Redis URL is configured, and as the fallback when Redis
    cannot be reached.
    """

    def __init__(self):
        self._memory: Dict[str, StoredValue] = {}

    async def connect(self):
        pass

    async def close(self):
        pass

    @property
    def backend(self) -> str:
        return "memory"

    async def get_string(self, key: str) -> Optional[str]:
        value = self._memory.get(key)
        return value if isinstance(value, str) else None

    async def set_string(self, key: str, value: str):
        self._memory[key] = value

    async def get_string_list(self, key: str) -> Optional[List[str]]:
        value = self._memory.get(key)
        return list(value) if isinstance(value, list) else None

    async def set_string_list(self, key: str, values: List[str]):
        self._memory[key] = list(values)

    async def delete(self, key: str):
        self._memory.pop(key, None)


class RedisPreferenceStore(PreferenceStore):
    """
    Redis-backed store. Strings are plain keys, string lists are Redis lists
    rewritten atomically on every save.
    """

    def __init__(self, url: str):
        super().__init__()
        self.url = url
        self.redis: Optional[aioredis.Redis] = None

    async def connect(self):
        """Establish Redis connection"""
        try:
            self.redis = aioredis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5
            )
            # Test connection
            await self.redis.ping()
            logger.info(f"Redis connected: {self.url}")
        except (RedisError, OSError) as e:
            logger.error(f"Redis connection failed: {e}")
            logger.warning("Falling back to in-memory preference storage")
            self.redis = None

    async def close(self):
        """Close Redis connection"""
        if self.redis:
            await self.redis.close()
            logger.info("Redis connection closed")

    @property
    def backend(self) -> str:
        return "redis" if self.redis else "memory"

    async def get_string(self, key: str) -> Optional[str]:
        if not self.redis:
            return await super().get_string(key)
        return await self.redis.get(key)

    async def set_string(self, key: str, value: str):
        if not self.redis:
            return await super().set_string(key, value)
        await self.redis.set(key, value)

    async def get_string_list(self, key: str) -> Optional[List[str]]:
        if not self.redis:
            return await super().get_string_list(key)
        if not await self.redis.exists(key):
            return None
        return await self.redis.lrange(key, 0, -1)

    async def set_string_list(self, key: str, values: List[str]):
        if not self.redis:
            return await super().set_string_list(key, values)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(key)
            if values:
                pipe.rpush(key, *values)
            await pipe.execute()

    async def delete(self, key: str):
        if not self.redis:
            return await super().delete(key)
        await self.redis.delete(key)


def create_preference_store(redis_url: Optional[str]) -> PreferenceStore:
    if not redis_url:
        logger.info("No REDIS_URL configured, using in-memory preference storage")
        return PreferenceStore()
    return RedisPreferenceStore(redis_url)
