"""
Authentication API endpoints.

Tokens are issued by the identity provider; these routes only inspect and
revoke them.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from zapship.app.db.session import get_db
from zapship.app.core.dependencies import get_current_user
from zapship.app.core.redis_client import get_redis
from zapship.app.core.token_revocation import revoke_token
from zapship.app.schemas.auth import VerifiedIdentity, LogoutResponse
from zapship.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/me", response_model=VerifiedIdentity)
async def me(current_user: VerifiedIdentity = Depends(get_current_user)):
    """Return the identity carried by the bearer token."""
    return current_user


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    current_user: VerifiedIdentity = Depends(get_current_user),
    redis=Depends(get_redis),
    db: AsyncSession = Depends(get_db)
):
    """Revoke the presented token for the rest of its lifetime."""
    revoked = await revoke_token(redis, current_user.token, current_user.email, current_user.expires_at)

    if revoked:
        await log_event(
            db=db,
            action=AuditAction.TOKEN_REVOKED,
            actor_email=current_user.email,
            subject_type="user",
            subject_id=current_user.email
        )

    return LogoutResponse(revoked=revoked)
