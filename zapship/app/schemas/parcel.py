"""
Parcel Pydantic schemas.

Defines request and response models for parcel booking.
"""

from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional
from zapship.app.models.parcel_enums import ParcelType, PaymentStatus
from zapship.app.schemas.base import CamelModel, Money


class ParcelCreate(CamelModel):
    """Schema for booking a new parcel."""
    parcel_type: ParcelType = Field(default=ParcelType.NON_DOCUMENT, description="document or non-document")
    parcel_name: str = Field(..., min_length=1, max_length=200, description="Parcel name / description")
    parcel_weight: Optional[float] = Field(None, gt=0, description="Weight in kilograms")

    sender_name: Optional[str] = Field(None, max_length=150)
    sender_email: EmailStr = Field(..., description="Email of the booking user")
    sender_region: Optional[str] = Field(None, max_length=100)
    sender_district: Optional[str] = Field(None, max_length=100)
    sender_address: Optional[str] = Field(None, max_length=500)

    receiver_name: Optional[str] = Field(None, max_length=150)
    receiver_email: Optional[EmailStr] = None
    receiver_phone: Optional[str] = Field(None, max_length=30)
    receiver_region: Optional[str] = Field(None, max_length=100)
    receiver_district: Optional[str] = Field(None, max_length=100)
    receiver_address: Optional[str] = Field(None, max_length=500)

    cost: Money = Field(..., gt=0, max_digits=12, decimal_places=2, description="Delivery cost in major currency units")


class ParcelResponse(CamelModel):
    """Schema for parcel response."""
    id: int
    parcel_type: ParcelType
    parcel_name: str
    parcel_weight: Optional[float]
    sender_name: Optional[str]
    sender_email: str
    sender_region: Optional[str]
    sender_district: Optional[str]
    sender_address: Optional[str]
    receiver_name: Optional[str]
    receiver_email: Optional[str]
    receiver_phone: Optional[str]
    receiver_region: Optional[str]
    receiver_district: Optional[str]
    receiver_address: Optional[str]
    cost: Money
    payment_status: PaymentStatus
    tracking_id: Optional[str]
    amount: Optional[Money]
    created_at: datetime


class ParcelDeleteResponse(CamelModel):
    """Result of a parcel deletion."""
    deleted_count: int
