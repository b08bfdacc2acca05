"""
User Pydantic schemas.
"""

from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional
from zapship.app.models.enums import UserRole
from zapship.app.schemas.base import CamelModel


class UserCreate(CamelModel):
    """
    Schema for registering a user profile.

    Sent by the client right after sign-up with the identity provider.
    Role is always assigned by the server.
    """
    email: EmailStr = Field(..., description="User email address")
    display_name: Optional[str] = Field(None, max_length=150)
    photo_url: Optional[str] = Field(None, max_length=500)


class UserResponse(CamelModel):
    id: int
    email: str
    display_name: Optional[str]
    photo_url: Optional[str]
    role: UserRole
    created_at: datetime


class UserExistsResponse(CamelModel):
    message: str = "User already exists"
