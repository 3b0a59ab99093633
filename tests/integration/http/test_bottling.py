from __future__ import annotations

from decimal import Decimal
from uuid import uuid4


async def _create_lot(client, headers, **fields) -> str:
    payload = {
        "name": "2022 Reserve Pinot",
        "status": "ready_to_bottle",
        "current_volume_gallons": "120",
        "current_alcohol_pct": "13.8",
        "current_ph": "3.5",
    }
    payload.update(fields)
    response = await client.post("/api/v1/lots/", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


async def test_readiness_for_ready_lot(client, auth_headers):
    lot_id = await _create_lot(client, auth_headers)
    response = await client.get(f"/api/v1/lots/{lot_id}/readiness", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["eligible"] is True
    assert body["nearly_ready"] is False
    assert body["score"] >= 80
    assert body["blockers"] == []
    assert body["aging_start"]["is_unknown"] is True
    assert body["aging_months"] == 0


async def test_candidates_filter_and_sort(client, auth_headers):
    ready = await _create_lot(client, auth_headers, name="Alpha")
    aging = await _create_lot(client, auth_headers, name="Bravo", status="aging")
    blocked = await _create_lot(
        client, auth_headers, name="Charlie", status="crushing", current_volume_gallons="2"
    )

    everything = await client.get("/api/v1/bottling/candidates", headers=auth_headers)
    ids = [item["lot"]["id"] for item in everything.json()]
    assert ids[0] == ready
    assert set(ids) == {ready, aging, blocked}

    eligible = await client.get(
        "/api/v1/bottling/candidates", params={"filter": "eligible"}, headers=auth_headers
    )
    assert [item["lot"]["id"] for item in eligible.json()] == [ready]

    by_name = await client.get(
        "/api/v1/bottling/candidates", params={"sort": "name_desc"}, headers=auth_headers
    )
    assert [item["lot"]["name"] for item in by_name.json()] == ["Charlie", "Bravo", "Alpha"]

    invalid = await client.get(
        "/api/v1/bottling/candidates", params={"filter": "nope"}, headers=auth_headers
    )
    assert invalid.status_code == 422


async def test_bottling_run_is_recorded_once(client, auth_headers):
    lot_id = await _create_lot(client, auth_headers)
    run_id = str(uuid4())
    payload = {"volume_gallons": "120", "bottling_run_id": run_id}

    first = await client.post(f"/api/v1/bottling/lots/{lot_id}", json=payload, headers=auth_headers)
    assert first.status_code == 200
    body = first.json()
    assert body["already_recorded"] is False
    assert body["lot"]["status"] == "bottled"
    assert Decimal(body["lot"]["current_volume_gallons"]) == Decimal("0")

    again = await client.post(f"/api/v1/bottling/lots/{lot_id}", json=payload, headers=auth_headers)
    assert again.status_code == 200
    assert again.json()["already_recorded"] is True
    assert again.json()["bulk_transaction_id"] == body["bulk_transaction_id"]

    ledger = await client.get(f"/api/v1/lots/{lot_id}/ttb-transactions", headers=auth_headers)
    assert sorted(tx["transaction_type"] for tx in ledger.json()) == [
        "bottled_produced",
        "bulk_bottled",
    ]

    candidates = await client.get("/api/v1/bottling/candidates", headers=auth_headers)
    assert candidates.json() == []


async def test_bottling_blocked_lot_returns_blockers(client, auth_headers):
    lot_id = await _create_lot(client, auth_headers, status="fermenting", current_alcohol_pct=None)
    response = await client.post(
        f"/api/v1/bottling/lots/{lot_id}", json={"volume_gallons": "10"}, headers=auth_headers
    )
    assert response.status_code == 422
    blockers = response.json()["details"]["blockers"]
    assert "ABV not measured (required for labels)" in blockers
    assert "Still in production (not aged)" in blockers
