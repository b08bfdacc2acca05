"""
Redis connection for the token revocation list.

One client per process; ``close_redis`` runs at application shutdown.
"""

import logging
import redis.asyncio as redis
from redis.exceptions import RedisError
from zapship.app.core.config import settings

logger = logging.getLogger(__name__)

redis_client = redis.from_url(
    settings.redis_url,
    decode_responses=settings.redis_decode_responses,
)


async def get_redis():
    """FastAPI dependency yielding the shared client (overridden in tests)."""
    return redis_client


async def ping_redis(client) -> bool:
    """Report whether ``client`` answers PING; errors count as unreachable."""
    try:
        return bool(await client.ping())
    except RedisError as e:
        logger.warning("Redis ping failed: %s", e)
        return False


async def close_redis() -> None:
    await redis_client.aclose()
    logger.info("Redis connection closed")
