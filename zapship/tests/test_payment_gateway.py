"""
Tests for the Stripe adapter, with the SDK patched out.
"""

import pytest
import stripe

from zapship.app.core.exceptions import PaymentInitiationError, ProviderUnavailableError, SessionLookupError
from zapship.app.services.payment_gateway import StripeGateway, to_session_info


def stripe_session(**overrides):
    session = stripe.checkout.Session.construct_from({
        "id": "cs_test_1",
        "object": "checkout.session",
        "payment_intent": "pi_123",
        "amount_total": 50000,
        "currency": "bdt",
        "customer_email": "sender@test.com",
        "payment_status": "paid",
        "status": "complete",
        "metadata": {"parcelId": "1", "parcelName": "Birthday gift"},
        "url": "https://checkout.stripe.com/c/pay/cs_test_1",
        **overrides,
    }, "sk_test_dummy")
    return session


def test_session_info_mapping():
    info = to_session_info(stripe_session())

    assert info.id == "cs_test_1"
    assert info.payment_intent == "pi_123"
    assert info.amount_total == 50000
    assert info.metadata == {"parcelId": "1", "parcelName": "Birthday gift"}
    assert info.is_paid


def test_session_info_expanded_intent():
    info = to_session_info(stripe_session(payment_intent={"id": "pi_456", "object": "payment_intent"}))

    assert info.payment_intent == "pi_456"


def test_session_info_unpaid():
    info = to_session_info(stripe_session(payment_status="unpaid", payment_intent=None, status="open"))

    assert info.payment_intent is None
    assert not info.is_paid


@pytest.mark.asyncio
async def test_create_checkout_session(mocker):
    create = mocker.patch("stripe.checkout.Session.create", return_value=stripe_session())
    gateway = StripeGateway(api_key="sk_test_dummy")

    url = await gateway.create_checkout_session(
        amount_minor=50000,
        currency="bdt",
        product_name="Birthday gift",
        customer_email="sender@test.com",
        metadata={"parcelId": "1", "parcelName": "Birthday gift"},
        success_url="http://shop.test/ok?session_id={CHECKOUT_SESSION_ID}",
        cancel_url="http://shop.test/cancel",
    )

    assert url == "https://checkout.stripe.com/c/pay/cs_test_1"
    kwargs = create.call_args.kwargs
    assert kwargs["mode"] == "payment"
    assert kwargs["line_items"][0]["price_data"]["unit_amount"] == 50000
    assert kwargs["line_items"][0]["quantity"] == 1
    assert kwargs["metadata"]["parcelId"] == "1"


@pytest.mark.asyncio
async def test_create_checkout_session_failure(mocker):
    mocker.patch("stripe.checkout.Session.create", side_effect=stripe.APIConnectionError("network down"))
    gateway = StripeGateway(api_key="sk_test_dummy")

    with pytest.raises(PaymentInitiationError):
        await gateway.create_checkout_session(
            amount_minor=100, currency="bdt", product_name="x", customer_email=None,
            metadata={}, success_url="http://a", cancel_url="http://b",
        )


@pytest.mark.asyncio
async def test_retrieve_unknown_session(mocker):
    mocker.patch(
        "stripe.checkout.Session.retrieve",
        side_effect=stripe.InvalidRequestError("No such checkout.session", param="id")
    )
    gateway = StripeGateway(api_key="sk_test_dummy")

    with pytest.raises(SessionLookupError):
        await gateway.retrieve_session("cs_nope")


@pytest.mark.asyncio
async def test_retrieve_provider_down(mocker):
    mocker.patch("stripe.checkout.Session.retrieve", side_effect=stripe.APIConnectionError("timeout"))
    gateway = StripeGateway(api_key="sk_test_dummy")

    with pytest.raises(ProviderUnavailableError):
        await gateway.retrieve_session("cs_test_1")


@pytest.mark.asyncio
async def test_retrieve_session(mocker):
    retrieve = mocker.patch("stripe.checkout.Session.retrieve", return_value=stripe_session())
    gateway = StripeGateway(api_key="sk_test_dummy")

    info = await gateway.retrieve_session("cs_test_1")

    assert info.payment_intent == "pi_123"
    assert info.is_paid
    retrieve.assert_called_once_with("cs_test_1", api_key="sk_test_dummy")
