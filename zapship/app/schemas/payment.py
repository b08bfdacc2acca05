"""
Payment Pydantic schemas.

Checkout initiation, finalization results and ledger listing.
"""

from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional
from zapship.app.schemas.base import CamelModel, Money


class CheckoutRequest(CamelModel):
    """
    Schema for POST /create-checkout-session.

    ``cost`` is in major currency units with at most two decimal places.
    """
    cost: Money = Field(..., gt=0, le=999999, max_digits=8, decimal_places=2)
    parcel_name: str = Field(..., min_length=1, max_length=200)
    sender_email: Optional[EmailStr] = None
    parcel_id: int = Field(..., ge=1)


class CheckoutSessionResponse(CamelModel):
    url: str


class PaymentSuccessResponse(CamelModel):
    """
    Outcome of PATCH /payment-success.

    ``success`` is False when the provider has not marked the session paid.
    ``already_recorded`` marks an idempotent replay.
    """
    success: bool
    message: Optional[str] = None
    already_recorded: Optional[bool] = None
    tracking_id: Optional[str] = None
    transaction_id: Optional[str] = None
    amount: Optional[Money] = None
    parcel_name: Optional[str] = None
    parcel_updated: Optional[bool] = None
    payment_id: Optional[int] = None


class PaymentResponse(CamelModel):
    """Ledger entry as returned by GET /payments."""
    id: int
    amount: Money
    currency: str
    customer_email: Optional[str]
    parcel_id: Optional[int]
    parcel_name: Optional[str]
    tracking_id: str
    transaction_id: str
    payment_status: str
    paid_at: datetime
