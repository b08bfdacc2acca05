"""
Tests for checkout session initiation.
"""

import pytest
from decimal import Decimal

from zapship.app.core.exceptions import ValidationError
from zapship.app.services.checkout import build_redirect_urls, to_major_units, to_minor_units


@pytest.mark.parametrize("cost", [1, 60, 150, 500, 2750, 99999])
def test_minor_unit_round_trip(cost):
    """Whole major-unit costs survive the trip to minor units and back."""
    minor = to_minor_units(cost)

    assert minor == cost * 100
    assert to_major_units(minor) == Decimal(cost)


def test_minor_units_accepts_cents():
    assert to_minor_units(Decimal("19.99")) == 1999
    assert to_minor_units("0.10") == 10


@pytest.mark.parametrize("cost", ["abc", "-5", "1.005", "NaN", "Infinity"])
def test_minor_units_rejects_bad_costs(cost):
    with pytest.raises(ValidationError):
        to_minor_units(cost)


def test_redirect_urls_keep_session_placeholder():
    success_url, cancel_url = build_redirect_urls("http://shop.test/")

    assert success_url == "http://shop.test/dashboard/payment-success?session_id={CHECKOUT_SESSION_ID}"
    assert cancel_url == "http://shop.test/dashboard/payment-cancelled"


@pytest.mark.asyncio
async def test_create_checkout_session(client, gateway, parcel):
    response = await client.post("/create-checkout-session", json={
        "cost": 500,
        "parcelName": "Birthday gift",
        "senderEmail": "sender@test.com",
        "parcelId": parcel.id,
    })

    assert response.status_code == 200
    assert response.json()["url"].startswith("https://checkout.stripe.test/")

    assert len(gateway.created) == 1
    call = gateway.created[0]
    assert call["amount_minor"] == 50000
    assert call["currency"] == "bdt"
    assert call["product_name"] == "Birthday gift"
    assert call["customer_email"] == "sender@test.com"
    assert call["metadata"] == {"parcelId": str(parcel.id), "parcelName": "Birthday gift"}
    assert call["success_url"].endswith("session_id={CHECKOUT_SESSION_ID}")


@pytest.mark.asyncio
async def test_create_checkout_session_accepts_numeric_strings(client, gateway):
    response = await client.post("/create-checkout-session", json={
        "cost": "250",
        "parcel_name": "Documents",
        "sender_email": "sender@test.com",
        "parcel_id": "7",
    })

    assert response.status_code == 200
    assert gateway.created[0]["amount_minor"] == 25000


@pytest.mark.asyncio
@pytest.mark.parametrize("cost", ["abc", -10, 0, "12.345"])
async def test_create_checkout_session_rejects_bad_cost(client, gateway, cost):
    response = await client.post("/create-checkout-session", json={
        "cost": cost,
        "parcelName": "Birthday gift",
        "senderEmail": "sender@test.com",
        "parcelId": 1,
    })

    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION"
    assert gateway.created == []


@pytest.mark.asyncio
async def test_create_checkout_session_provider_down(client, gateway, parcel, db_session):
    """Provider failure surfaces as 502 and leaves the parcel untouched."""
    gateway.unavailable = True

    response = await client.post("/create-checkout-session", json={
        "cost": 500,
        "parcelName": "Birthday gift",
        "senderEmail": "sender@test.com",
        "parcelId": parcel.id,
    })

    assert response.status_code == 502
    assert response.json()["error_code"] == "ERR_PROVIDER_002"

    await db_session.refresh(parcel)
    assert parcel.payment_status.value == "unpaid"
