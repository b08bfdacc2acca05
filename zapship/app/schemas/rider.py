"""
Rider Pydantic schemas.
"""

from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional
from zapship.app.models.enums import RiderStatus
from zapship.app.schemas.base import CamelModel


class RiderCreate(CamelModel):
    """Schema for a rider application."""
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    age: Optional[int] = Field(None, ge=18, le=100)
    phone: Optional[str] = Field(None, max_length=30)
    region: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    nid: Optional[str] = Field(None, max_length=50)
    bike_brand: Optional[str] = Field(None, max_length=100)
    bike_registration: Optional[str] = Field(None, max_length=50)


class RiderStatusUpdate(CamelModel):
    """
    Schema for PATCH /riders/{id}.

    ``email`` identifies the user account promoted on approval.
    """
    status: RiderStatus
    email: Optional[EmailStr] = None


class RiderResponse(CamelModel):
    id: int
    name: str
    email: str
    age: Optional[int]
    phone: Optional[str]
    region: Optional[str]
    district: Optional[str]
    nid: Optional[str]
    bike_brand: Optional[str]
    bike_registration: Optional[str]
    status: RiderStatus
    created_at: datetime
