"""
Payment finalization.

Applies a confirmed checkout session exactly once:

1. Retrieve the session from Stripe (source of truth)
2. Idempotency check on the transaction id (payment intent)
3. Non-paid session -> nothing to apply
4. Issue tracking id, mark the parcel paid (unpaid -> paid only)
5. Append the ledger entry
6. Commit parcel update and ledger entry together

A racing duplicate fails on the unique transaction id and is answered from
the row that won.
"""

import logging
import warnings
from typing import Optional

from fastapi import Depends
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from zapship.app.core.config import settings
from zapship.app.core.exceptions import ConsistencyWarning, IncompleteSessionError
from zapship.app.models.parcel import Parcel
from zapship.app.models.parcel_enums import PaymentStatus
from zapship.app.models.payment import Payment
from zapship.app.schemas.payment import PaymentSuccessResponse
from zapship.app.services.audit import AuditAction, log_event
from zapship.app.services.checkout import to_major_units
from zapship.app.services.payment_gateway import CheckoutSessionInfo, StripeGateway, get_payment_gateway
from zapship.app.services.tracking import issue_tracking_id

logger = logging.getLogger(__name__)


async def find_payment_by_transaction(db: AsyncSession, transaction_id: str) -> Optional[Payment]:
    result = await db.execute(
        select(Payment).where(Payment.transaction_id == transaction_id)
    )
    return result.scalar_one_or_none()


def _parse_parcel_id(raw: Optional[str]) -> Optional[int]:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def already_recorded(payment: Payment) -> PaymentSuccessResponse:
    return PaymentSuccessResponse(
        success=True,
        message="already exist",
        already_recorded=True,
        tracking_id=payment.tracking_id,
        transaction_id=payment.transaction_id,
        amount=payment.amount,
        parcel_name=payment.parcel_name,
    )


class PaymentFinalizer:

    def __init__(self, gateway: StripeGateway, tracking_prefix: Optional[str] = None):
        self.gateway = gateway
        self.tracking_prefix = tracking_prefix or settings.tracking_id_prefix

    async def finalize(self, db: AsyncSession, session_id: str) -> PaymentSuccessResponse:
        """
        Finalize the payment behind ``session_id``.

        Safe to call repeatedly for the same session.

        Raises:
            SessionLookupError: Stripe does not know the session
            ProviderUnavailableError: Stripe could not be reached
            IncompleteSessionError: a paid session carries no amount
        """
        session = await self.gateway.retrieve_session(session_id)

        # Sessions settled without an intent fall back to their own id
        transaction_id = session.payment_intent or session.id

        existing = await find_payment_by_transaction(db, transaction_id)
        if existing:
            logger.info("Payment %s already recorded, replaying", transaction_id)
            return already_recorded(existing)

        if not session.is_paid:
            await log_event(
                db=db,
                action=AuditAction.PAYMENT_NOT_COMPLETED,
                actor_email=session.customer_email,
                subject_type="checkout_session",
                subject_id=session.id,
                metadata={
                    "payment_status": session.payment_status,
                    "status": session.status,
                    "parcel_id": session.metadata.get("parcelId"),
                }
            )
            logger.info("Session %s not paid (%s), nothing applied", session.id, session.payment_status)
            return PaymentSuccessResponse(success=False)

        if session.amount_total is None:
            logger.error("Paid session %s has no amount_total, refusing to record it", session.id)
            raise IncompleteSessionError(session.id, "amount_total")

        return await self._apply(db, session, transaction_id)

    async def _apply(self, db: AsyncSession, session: CheckoutSessionInfo, transaction_id: str) -> PaymentSuccessResponse:
        amount = to_major_units(session.amount_total)
        parcel_name = session.metadata.get("parcelName")
        parcel_id = _parse_parcel_id(session.metadata.get("parcelId"))

        tracking_id = await issue_tracking_id(db, self.tracking_prefix)

        parcel_updated = False
        if parcel_id is not None:
            result = await db.execute(
                update(Parcel)
                .where(Parcel.id == parcel_id, Parcel.payment_status == PaymentStatus.UNPAID)
                .values(payment_status=PaymentStatus.PAID, tracking_id=tracking_id, amount=amount)
            )
            parcel_updated = result.rowcount == 1

        if not parcel_updated:
            parcel = await db.get(Parcel, parcel_id) if parcel_id is not None else None
            if parcel is None:
                message = (
                    f"Session {session.id} paid for unknown parcel {session.metadata.get('parcelId')!r}; "
                    f"recording transaction {transaction_id} anyway"
                )
                logger.warning(message)
                warnings.warn(message, ConsistencyWarning, stacklevel=2)
                await log_event(
                    db=db,
                    action=AuditAction.PAYMENT_PARCEL_MISSING,
                    actor_email=session.customer_email,
                    subject_type="payment",
                    subject_id=transaction_id,
                    metadata={"session_id": session.id, "parcel_id": session.metadata.get("parcelId")},
                    commit=False
                )
            else:
                # Tracking id is assigned once per parcel
                logger.warning(
                    "Parcel %s already paid, transaction %s reuses tracking id %s",
                    parcel.id, transaction_id, parcel.tracking_id
                )
                tracking_id = parcel.tracking_id or tracking_id

        payment = Payment(
            amount=amount,
            currency=session.currency or settings.payment_currency,
            customer_email=session.customer_email,
            parcel_id=parcel_id,
            tracking_id=tracking_id,
            parcel_name=parcel_name,
            transaction_id=transaction_id,
            payment_status=session.payment_status,
        )
        db.add(payment)

        await log_event(
            db=db,
            action=AuditAction.PAYMENT_RECORDED,
            actor_email=session.customer_email,
            subject_type="parcel",
            subject_id=parcel_id,
            metadata={"transaction_id": transaction_id, "tracking_id": tracking_id, "amount": str(amount)},
            commit=False
        )

        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            existing = await find_payment_by_transaction(db, transaction_id)
            if existing is None:
                raise
            logger.info("Concurrent finalize for %s lost the race, replaying winner", transaction_id)
            return already_recorded(existing)

        logger.info(
            "Payment %s recorded for parcel %s: %s %s, tracking %s",
            transaction_id, parcel_id, amount, payment.currency, tracking_id
        )

        return PaymentSuccessResponse(
            success=True,
            tracking_id=tracking_id,
            transaction_id=transaction_id,
            amount=amount,
            parcel_name=parcel_name,
            parcel_updated=parcel_updated,
            payment_id=payment.id,
        )


def get_payment_finalizer(gateway: StripeGateway = Depends(get_payment_gateway)) -> PaymentFinalizer:
    """FastAPI dependency wiring the finalizer to the configured gateway."""
    return PaymentFinalizer(gateway)
