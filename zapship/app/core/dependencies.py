"""
Authentication dependencies for FastAPI.

This module provides the bearer token guard that protects sensitive routes.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from zapship.app.core.exceptions import AuthenticationError, TokenRevokedError
from zapship.app.core.jwt import decode_identity_token
from zapship.app.core.redis_client import get_redis
from zapship.app.core.token_revocation import is_token_revoked
from zapship.app.schemas.auth import VerifiedIdentity

# Missing credentials are reported as 401 by the guard itself
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    redis=Depends(get_redis)
) -> VerifiedIdentity:
    """
    FastAPI dependency for bearer token authentication.

    Security checks:
    1. A bearer credential is present
    2. JWT signature and expiry are valid
    3. The token carries an email claim
    4. The token has not been revoked

    Returns:
        The verified identity of the caller

    Raises:
        AuthenticationError: 401 if any check fails
        TokenRevokedError: 401 if the token was revoked
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    token = credentials.credentials

    payload = decode_identity_token(token)
    if payload is None:
        raise AuthenticationError()

    email = payload.get("email")
    if not email:
        raise AuthenticationError("Invalid token payload")

    if await is_token_revoked(redis, token):
        raise TokenRevokedError()

    return VerifiedIdentity(
        email=email,
        role=payload.get("role"),
        token=token,
        expires_at=payload.get("exp"),
    )
