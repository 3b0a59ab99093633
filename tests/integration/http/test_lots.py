from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

from sqlalchemy import select

from src.infrastructure.db.orm.ttb_transaction import TTBTransactionORM


async def test_requests_without_token_are_rejected(client):
    response = await client.get("/api/v1/lots/")
    assert response.status_code == 401
    assert response.json()["code"] == "auth_error"

    health = await client.get("/api/v1/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}


async def test_lot_lifecycle(client, auth_headers):
    create_response = await client.post(
        "/api/v1/lots/",
        json={
            "name": "2023 Chardonnay",
            "varietal": "Chardonnay",
            "vintage": 2023,
            "current_volume_gallons": "250",
            "current_alcohol_pct": "13.2",
        },
        headers=auth_headers,
    )
    assert create_response.status_code == 201
    created = create_response.json()
    lot_id = created["id"]
    assert created["status"] == "fermenting"
    assert created["ttb_tax_class"] == "table_wine_16"
    assert created["tax_class_rules_version"]

    list_response = await client.get("/api/v1/lots/", headers=auth_headers)
    assert [lot["id"] for lot in list_response.json()] == [lot_id]

    chemistry = await client.put(
        f"/api/v1/lots/{lot_id}/chemistry",
        json={"current_alcohol_pct": "16.4", "current_ph": "3.4"},
        headers=auth_headers,
    )
    assert chemistry.status_code == 200
    body = chemistry.json()
    assert body["tax_class_change"]["old_class"] == "table_wine_16"
    assert body["tax_class_change"]["new_class"] == "table_wine_21"
    assert body["lot"]["ttb_tax_class"] == "table_wine_21"

    barrel = await client.post(
        f"/api/v1/lots/{lot_id}/barrels",
        json={"barrel_name": "French Oak #7", "assigned_at": "2024-01-15T00:00:00Z"},
        headers=auth_headers,
    )
    assert barrel.status_code == 201
    detail = await client.get(f"/api/v1/lots/{lot_id}", headers=auth_headers)
    assert [b["barrel_name"] for b in detail.json()["barrel_assignments"]] == ["French Oak #7"]

    wine_type = await client.put(
        f"/api/v1/lots/{lot_id}/wine-type",
        json={"wine_type": "sparkling_bf"},
        headers=auth_headers,
    )
    assert wine_type.json()["ttb_tax_class"] == "sparkling_bf"

    bond = await client.put(
        f"/api/v1/lots/{lot_id}/bond-status", json={"bond_status": "taxpaid"}, headers=auth_headers
    )
    assert bond.json()["bond_status"] == "taxpaid"

    archive = await client.post(f"/api/v1/lots/{lot_id}/archive", headers=auth_headers)
    assert archive.status_code == 200
    assert archive.json()["archived_at"] is not None

    hidden = await client.get("/api/v1/lots/", headers=auth_headers)
    assert hidden.json() == []
    shown = await client.get(
        "/api/v1/lots/", params={"include_archived": "true"}, headers=auth_headers
    )
    assert len(shown.json()) == 1

    blocked = await client.patch(
        f"/api/v1/lots/{lot_id}", json={"name": "Renamed"}, headers=auth_headers
    )
    assert blocked.status_code == 409


async def test_lots_are_isolated_per_tenant(client, make_headers, auth_headers):
    created = await client.post("/api/v1/lots/", json={"name": "Private"}, headers=auth_headers)
    lot_id = created.json()["id"]

    other = make_headers(uuid4(), uuid4())
    assert (await client.get(f"/api/v1/lots/{lot_id}", headers=other)).status_code == 404
    assert (await client.get("/api/v1/lots/", headers=other)).json() == []


async def test_finishing_fermentation_logs_production_once(app, client, auth_headers):
    created = await client.post(
        "/api/v1/lots/",
        json={"name": "Zinfandel", "current_volume_gallons": "300", "current_alcohol_pct": "15"},
        headers=auth_headers,
    )
    lot_id = created.json()["id"]

    await client.patch(f"/api/v1/lots/{lot_id}", json={"status": "aging"}, headers=auth_headers)
    await client.patch(f"/api/v1/lots/{lot_id}", json={"status": "fermenting"}, headers=auth_headers)
    await client.patch(f"/api/v1/lots/{lot_id}", json={"status": "aging"}, headers=auth_headers)

    response = await client.get(f"/api/v1/lots/{lot_id}/ttb-transactions", headers=auth_headers)
    items = response.json()
    assert len(items) == 1
    assert items[0]["transaction_type"] == "produced_fermentation"
    assert Decimal(items[0]["volume_gallons"]) == Decimal("300")

    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        rows = (await session.execute(select(TTBTransactionORM))).scalars().all()
        assert [row.source_event_type for row in rows] == ["lot_fermentation_complete"]


async def test_invalid_payload_returns_validation_error(client, auth_headers):
    response = await client.post(
        "/api/v1/lots/", json={"name": "", "current_volume_gallons": "-1"}, headers=auth_headers
    )
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "validation_error"
    assert body["details"]["errors"]
