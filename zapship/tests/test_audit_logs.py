"""
Tests for the operator audit trail.
"""

import pytest


@pytest.mark.asyncio
async def test_abandoned_checkout_is_visible_to_operator(client, gateway, parcel, admin_headers):
    gateway.add_session("S2", parcel.id, payment_status="unpaid", payment_intent=None)
    await client.patch("/payment-success", params={"session_id": "S2"})

    response = await client.get(
        "/audit-logs",
        params={"action": "PAYMENT_NOT_COMPLETED"},
        headers=admin_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    entry = data["logs"][0]
    assert entry["subjectType"] == "checkout_session"
    assert entry["subjectId"] == "S2"
    assert entry["metaData"]["payment_status"] == "unpaid"


@pytest.mark.asyncio
async def test_audit_trail_filters_by_subject(client, gateway, parcel, admin_headers):
    gateway.add_session("S1", parcel.id, payment_intent="TX1")
    await client.patch("/payment-success", params={"session_id": "S1"})
    await client.delete(f"/parcels/{parcel.id}")

    response = await client.get(
        "/audit-logs",
        params={"subjectType": "parcel", "subjectId": str(parcel.id), "limit": 1},
        headers=admin_headers
    )

    logs = response.json()["logs"]
    assert len(logs) == 1
    assert logs[0]["action"] == "PARCEL_DELETED"


@pytest.mark.asyncio
async def test_audit_trail_is_admin_only(client, auth_headers):
    unauthenticated = await client.get("/audit-logs")
    assert unauthenticated.status_code == 401

    forbidden = await client.get("/audit-logs", headers=auth_headers("sender@test.com"))
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "Admin access required"
