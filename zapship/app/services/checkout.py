"""
Checkout session initiation.

Converts the parcel cost to the provider's minor units and opens a hosted
Stripe Checkout session carrying the parcel id and name as metadata.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zapship.app.core.config import settings
from zapship.app.core.exceptions import ValidationError
from zapship.app.schemas.payment import CheckoutRequest
from zapship.app.services.audit import AuditAction, log_event
from zapship.app.services.payment_gateway import StripeGateway, get_payment_gateway

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_MAJOR = 100


def to_minor_units(cost: Union[Decimal, int, str]) -> int:
    """
    Convert a major-unit cost to the provider's integer minor units.

    Raises:
        ValidationError: cost is not numeric, is negative, or has sub-minor precision
    """
    try:
        amount = Decimal(str(cost)) * MINOR_UNITS_PER_MAJOR
    except (InvalidOperation, ValueError):
        raise ValidationError("Cost must be numeric", details={"cost": str(cost)})

    if not amount.is_finite() or amount < 0:
        raise ValidationError("Cost must be a non-negative amount", details={"cost": str(cost)})
    if amount != amount.to_integral_value():
        raise ValidationError("Cost has more precision than the currency allows", details={"cost": str(cost)})

    return int(amount)


def to_major_units(amount_minor: int) -> Decimal:
    """Convert provider minor units back to major units, exactly."""
    return Decimal(amount_minor) / MINOR_UNITS_PER_MAJOR


def build_redirect_urls(site_domain: Optional[str] = None) -> tuple[str, str]:
    """Success and cancel URLs; the success URL keeps Stripe's session id placeholder."""
    domain = (site_domain or settings.site_domain).rstrip("/")
    return (
        f"{domain}{settings.checkout_success_path}",
        f"{domain}{settings.checkout_cancel_path}",
    )


class CheckoutSessionInitiator:

    def __init__(self, gateway: StripeGateway, currency: Optional[str] = None):
        self.gateway = gateway
        self.currency = (currency or settings.payment_currency).lower()

    async def start(self, db: AsyncSession, request: CheckoutRequest) -> str:
        """
        Open a hosted checkout session for a parcel.

        No parcel state is touched; the only write is an audit entry once the
        provider has accepted the session.

        Returns:
            Redirect URL of the hosted payment page

        Raises:
            ValidationError: the cost cannot be expressed in minor units
            PaymentInitiationError: the provider call failed
        """
        amount_minor = to_minor_units(request.cost)
        if amount_minor == 0:
            raise ValidationError("Cost must be positive", details={"cost": str(request.cost)})

        success_url, cancel_url = build_redirect_urls()

        url = await self.gateway.create_checkout_session(
            amount_minor=amount_minor,
            currency=self.currency,
            product_name=request.parcel_name,
            customer_email=request.sender_email,
            metadata={
                "parcelId": str(request.parcel_id),
                "parcelName": request.parcel_name,
            },
            success_url=success_url,
            cancel_url=cancel_url,
        )

        await log_event(
            db=db,
            action=AuditAction.CHECKOUT_STARTED,
            actor_email=request.sender_email,
            subject_type="parcel",
            subject_id=request.parcel_id,
            metadata={"amount_minor": amount_minor, "currency": self.currency}
        )

        logger.info("Checkout started for parcel %s (%s %s)", request.parcel_id, amount_minor, self.currency)
        return url


def get_checkout_initiator(gateway: StripeGateway = Depends(get_payment_gateway)) -> CheckoutSessionInitiator:
    """FastAPI dependency wiring the initiator to the configured gateway."""
    return CheckoutSessionInitiator(gateway)
