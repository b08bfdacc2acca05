"""
Authentication Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional


class VerifiedIdentity(BaseModel):
    """
    Identity yielded by the bearer token guard.

    Only the email is required; the role claim is informational.
    """
    email: str = Field(..., description="Verified email address")
    role: Optional[str] = Field(default=None, description="Role claim, if the issuer sets one")
    token: str = Field(..., exclude=True)
    expires_at: Optional[int] = Field(default=None, exclude=True)


class LogoutResponse(BaseModel):
    """Response for POST /auth/logout."""
    revoked: bool
