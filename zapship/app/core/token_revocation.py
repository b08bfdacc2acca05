"""
Token Revocation System using Redis.

Implements token blacklisting to immediately invalidate bearer tokens
when users log out.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from redis.exceptions import RedisError
from zapship.app.core.config import settings

logger = logging.getLogger(__name__)

# Redis key prefix for blacklisted tokens
TOKEN_BLACKLIST_PREFIX = "blacklist:token:"


def _remaining_ttl(expires_at: Optional[int]) -> int:
    """Seconds until the token expires, falling back to the configured lifetime."""
    if expires_at is None:
        return settings.access_token_expire_minutes * 60
    remaining = int(expires_at - datetime.now(timezone.utc).timestamp())
    return max(remaining, 1)


async def revoke_token(redis, token: str, email: str, expires_at: Optional[int] = None) -> bool:
    """
    Revoke a specific JWT token by adding it to the blacklist.

    Args:
        redis: Redis client
        token: The JWT token string to revoke
        email: Verified email of the token owner
        expires_at: The token's ``exp`` claim; the blacklist entry lives as long as the token

    Returns:
        True if successfully revoked, False otherwise
    """
    try:
        key = f"{TOKEN_BLACKLIST_PREFIX}{token}"
        await redis.set(key, email, ex=_remaining_ttl(expires_at))
        return True
    except RedisError as e:
        logger.error("Error revoking token for %s: %s", email, e)
        return False


async def is_token_revoked(redis, token: str) -> bool:
    """
    Check if a token has been revoked.

    Args:
        redis: Redis client
        token: JWT token string to check

    Returns:
        True if token is revoked, False otherwise
    """
    try:
        key = f"{TOKEN_BLACKLIST_PREFIX}{token}"
        exists = await redis.exists(key)
        return exists > 0
    except RedisError as e:
        # Fail-open: Redis outage must not lock every user out
        logger.warning("Error checking token revocation: %s", e)
        return False
