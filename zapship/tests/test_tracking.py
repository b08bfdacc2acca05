"""
Tests for tracking id generation and issuance.
"""

import pytest
from datetime import datetime, timezone, timedelta

from zapship.app.core.exceptions import TrackingIdExhaustedError
from zapship.app.models.payment import Payment
from zapship.app.services import tracking
from zapship.app.services.tracking import generate_tracking_id, issue_tracking_id, tracking_id_pattern


def test_tracking_id_format():
    """PREFIX-YYYYMMDD-HEX6 with today's UTC date."""
    tracking_id = generate_tracking_id("ZAP")
    today = datetime.now(timezone.utc).strftime("%Y%m%d")

    assert tracking_id_pattern("ZAP").match(tracking_id)
    prefix, date, token = tracking_id.split("-")
    assert prefix == "ZAP"
    assert date == today
    assert len(token) == 6
    assert set(token) <= set("0123456789ABCDEF")


def test_tracking_id_uses_utc_date():
    """A late-evening local time still yields the UTC calendar date."""
    dhaka = timezone(timedelta(hours=6))
    now = datetime(2025, 3, 1, 2, 30, tzinfo=dhaka)  # 2025-02-28 20:30 UTC

    assert generate_tracking_id("ZAP", now=now).startswith("ZAP-20250228-")


def test_tracking_ids_are_random():
    ids = {generate_tracking_id() for _ in range(200)}
    assert len(ids) > 195


@pytest.mark.asyncio
async def test_issue_tracking_id_skips_ids_in_use(db_session, mocker):
    """A candidate already on the ledger is regenerated."""
    db_session.add(Payment(
        amount=500, currency="bdt", customer_email="a@test.com", parcel_id=1,
        tracking_id="ZAP-20250101-AAAAAA", parcel_name="Box",
        transaction_id="pi_existing", payment_status="paid",
    ))
    await db_session.commit()

    mocker.patch.object(
        tracking, "generate_tracking_id",
        side_effect=["ZAP-20250101-AAAAAA", "ZAP-20250101-BBBBBB"]
    )

    issued = await issue_tracking_id(db_session, "ZAP")

    assert issued == "ZAP-20250101-BBBBBB"


@pytest.mark.asyncio
async def test_issue_tracking_id_gives_up(db_session, mocker):
    db_session.add(Payment(
        amount=500, currency="bdt", customer_email="a@test.com", parcel_id=1,
        tracking_id="ZAP-20250101-AAAAAA", parcel_name="Box",
        transaction_id="pi_existing", payment_status="paid",
    ))
    await db_session.commit()

    mocker.patch.object(tracking, "generate_tracking_id", return_value="ZAP-20250101-AAAAAA")

    with pytest.raises(TrackingIdExhaustedError):
        await issue_tracking_id(db_session, "ZAP", max_attempts=3)
