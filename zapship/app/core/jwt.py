"""
Identity tokens.

The identity provider signs bearer tokens with the shared secret. Every token
names its holder in an ``email`` claim; ``role`` is optional. Minting is only
needed by tooling (seeding, tests).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from zapship.app.core.config import settings


def issue_identity_token(
    email: str,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    **extra_claims: Any
) -> str:
    """Sign a token for ``email`` that expires after ``expires_delta``."""
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=settings.access_token_expire_minutes)
    issued_at = datetime.now(timezone.utc)

    claims: Dict[str, Any] = {"sub": email, "email": email, "iat": issued_at, "exp": issued_at + lifetime}
    if role:
        claims["role"] = role
    claims.update(extra_claims)

    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_identity_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify signature and expiry.

    Returns:
        The claims, or None for a forged, malformed or expired token
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
