"""
Stripe Checkout adapter.

The only module that talks to Stripe. The SDK is blocking, so every call runs
in the threadpool and never stalls the event loop.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import stripe
from starlette.concurrency import run_in_threadpool

from zapship.app.core.config import settings
from zapship.app.core.exceptions import (
    PaymentInitiationError,
    ProviderUnavailableError,
    SessionLookupError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutSessionInfo:
    """Trusted view of a provider checkout session."""
    id: str
    payment_intent: Optional[str]
    amount_total: Optional[int]
    currency: Optional[str]
    customer_email: Optional[str]
    payment_status: str
    status: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid"


class StripeGateway:
    """Creates and retrieves Stripe Checkout Sessions."""

    def __init__(self, api_key: str):
        self.api_key = api_key

    async def create_checkout_session(
        self,
        *,
        amount_minor: int,
        currency: str,
        product_name: str,
        customer_email: Optional[str],
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> str:
        """
        Create a single-use hosted payment session.

        Returns:
            The hosted checkout URL

        Raises:
            PaymentInitiationError: Stripe rejected the call or could not be reached
        """
        try:
            session = await run_in_threadpool(
                stripe.checkout.Session.create,
                api_key=self.api_key,
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "unit_amount": amount_minor,
                            "product_data": {"name": product_name},
                        },
                        "quantity": 1,
                    }
                ],
                mode="payment",
                customer_email=customer_email,
                metadata=metadata,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error("Stripe checkout session creation failed: %s", e)
            raise PaymentInitiationError() from e

        logger.info("Created checkout session %s for parcel %s", session.id, metadata.get("parcelId"))
        return session.url

    async def retrieve_session(self, session_id: str) -> CheckoutSessionInfo:
        """
        Fetch the provider's view of a checkout session.

        Raises:
            SessionLookupError: Stripe does not know the session id
            ProviderUnavailableError: Stripe could not be reached or failed
        """
        try:
            session = await run_in_threadpool(
                stripe.checkout.Session.retrieve, session_id, api_key=self.api_key
            )
        except stripe.InvalidRequestError as e:
            logger.warning("Checkout session %s lookup rejected: %s", session_id, e)
            raise SessionLookupError(session_id) from e
        except stripe.StripeError as e:
            logger.error("Stripe session retrieval failed for %s: %s", session_id, e)
            raise ProviderUnavailableError() from e

        return to_session_info(session)


def to_session_info(session: Any) -> CheckoutSessionInfo:
    """Map a Stripe ``checkout.Session`` onto ``CheckoutSessionInfo``."""
    payment_intent = session.get("payment_intent")
    # Expanded intents arrive as objects
    if payment_intent is not None and not isinstance(payment_intent, str):
        payment_intent = payment_intent.get("id")

    return CheckoutSessionInfo(
        id=session.get("id"),
        payment_intent=payment_intent,
        amount_total=session.get("amount_total"),
        currency=session.get("currency"),
        customer_email=session.get("customer_email"),
        payment_status=session.get("payment_status") or "unpaid",
        status=session.get("status"),
        metadata={k: str(v) for k, v in (session.get("metadata") or {}).items()},
    )


def get_payment_gateway() -> StripeGateway:
    """FastAPI dependency returning the configured gateway."""
    return StripeGateway(api_key=settings.stripe_secret_key)
