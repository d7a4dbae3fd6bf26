# app/core/redis_lifecycle.py
import redis.asyncio as redis
from app.core.config import settings
from app.core.exceptions import StoreUnavailable
from app.core.logger import logger
from typing import Optional

_redis_client: Optional[redis.Redis] = None


async def init_redis_client() -> redis.Redis:
    """Connect the shared client used by the Redis item store."""
    global _redis_client

    if _redis_client is None:
        client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        try:
            await client.ping()
        except redis.RedisError as e:
            await client.close()
            logger.error(f"Redis at {settings.REDIS_URL} is not reachable: {e}")
            raise StoreUnavailable("Could not connect to Redis server") from e
        _redis_client = client

    return _redis_client


async def close_redis():
    global _redis_client
    if _redis_client:
        await _redis_client.close()
        _redis_client = None
