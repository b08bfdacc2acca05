"""
Payment API Endpoints.

Hosted checkout initiation, payment finalization and the caller's ledger.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select
from zapship.app.db.session import get_db
from zapship.app.models.payment import Payment
from zapship.app.schemas.auth import VerifiedIdentity
from zapship.app.schemas.payment import (
    CheckoutRequest,
    CheckoutSessionResponse,
    PaymentResponse,
    PaymentSuccessResponse,
)
from zapship.app.core.dependencies import get_current_user
from zapship.app.core.guards import EmailOwnershipGuard
from zapship.app.services.checkout import CheckoutSessionInitiator, get_checkout_initiator
from zapship.app.services.payment_finalizer import PaymentFinalizer, get_payment_finalizer

router = APIRouter(tags=["Payments"])
ownership_guard = EmailOwnershipGuard()


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse, status_code=status.HTTP_200_OK)
async def create_checkout_session(
    checkout: CheckoutRequest,
    initiator: CheckoutSessionInitiator = Depends(get_checkout_initiator),
    db: AsyncSession = Depends(get_db)
):
    """
    Open a Stripe hosted checkout for a parcel.

    Returns the URL the client should redirect to.
    """
    url = await initiator.start(db, checkout)
    return CheckoutSessionResponse(url=url)


@router.patch("/payment-success", response_model=PaymentSuccessResponse, response_model_exclude_none=True)
async def payment_success(
    session_id: str = Query(..., min_length=1, description="Stripe checkout session id"),
    finalizer: PaymentFinalizer = Depends(get_payment_finalizer),
    db: AsyncSession = Depends(get_db)
):
    """
    Finalize the payment of a returning checkout session.

    Idempotent: repeated calls for one session return the recorded outcome.
    """
    return await finalizer.finalize(db, session_id)


@router.get("/payments", response_model=List[PaymentResponse])
async def list_payments(
    email: Optional[str] = Query(None, description="Customer email; must be the caller's own"),
    current_user: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    List ledger entries of the authenticated customer, newest first.

    Asking for another customer's email is forbidden.
    """
    owner_email = ownership_guard.resolve(email, current_user, "payments")

    result = await db.execute(
        select(Payment)
        .where(func.lower(Payment.customer_email) == owner_email.strip().lower())
        .order_by(Payment.paid_at.desc(), Payment.id.desc())
    )
    payments = result.scalars().all()

    return [PaymentResponse.model_validate(p) for p in payments]
