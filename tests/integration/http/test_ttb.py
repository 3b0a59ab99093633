from __future__ import annotations

import base64
from decimal import Decimal
from uuid import uuid4

REGISTRATION = {
    "operated_by": "Hillside Cellars LLC",
    "trade_name": "Hillside",
    "ein": "123456789",
    "registry_number": "BWC-CA-12345",
    "premises_address": "1 Vineyard Rd",
    "premises_city": "Napa",
    "premises_state": "CA",
    "premises_zip": "94558",
}


async def _post_tx(client, headers, tx_type, gallons, tx_date, tax_class="table_wine_16"):
    response = await client.post(
        "/api/v1/ttb/transactions",
        json={
            "transaction_type": tx_type,
            "tax_class": tax_class,
            "volume_gallons": gallons,
            "transaction_date": tx_date,
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def test_transaction_crud(client, auth_headers):
    created = await _post_tx(client, auth_headers, "bulk_tasting", "2.5", "2024-05-03")
    tx_id = created["id"]

    fetched = await client.get(f"/api/v1/ttb/transactions/{tx_id}", headers=auth_headers)
    assert fetched.json()["transaction_type"] == "bulk_tasting"

    patched = await client.patch(
        f"/api/v1/ttb/transactions/{tx_id}",
        json={"volume_gallons": "3", "notes": "Trade tasting"},
        headers=auth_headers,
    )
    assert patched.status_code == 200
    assert Decimal(patched.json()["volume_gallons"]) == Decimal("3")
    assert patched.json()["notes"] == "Trade tasting"

    listed = await client.get(
        "/api/v1/ttb/transactions",
        params={"date_from": "2024-05-01", "date_to": "2024-05-31"},
        headers=auth_headers,
    )
    assert [tx["id"] for tx in listed.json()] == [tx_id]

    deleted = await client.delete(f"/api/v1/ttb/transactions/{tx_id}", headers=auth_headers)
    assert deleted.status_code == 204
    missing = await client.get(f"/api/v1/ttb/transactions/{tx_id}", headers=auth_headers)
    assert missing.status_code == 404


async def test_logging_event_is_idempotent(client, auth_headers):
    payload = {
        "source_event_type": "transfer_out",
        "source_event_id": str(uuid4()),
        "transaction_type": "bulk_transferred_bond",
        "tax_class": "table_wine_21",
        "volume_gallons": "55",
        "transaction_date": "2024-05-10",
    }
    first = await client.post("/api/v1/ttb/transactions/log", json=payload, headers=auth_headers)
    second = await client.post("/api/v1/ttb/transactions/log", json=payload, headers=auth_headers)
    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["created"] is False
    assert second.json()["transaction"]["id"] == first.json()["transaction"]["id"]

    volumes = await client.get(
        "/api/v1/ttb/transactions/volumes",
        params={"date_from": "2024-05-01", "date_to": "2024-05-31"},
        headers=auth_headers,
    )
    assert Decimal(volumes.json()["bulk_transferred_bond|table_wine_21"]) == Decimal("55")


async def test_report_generation_and_saved_lifecycle(client, auth_headers):
    await _post_tx(client, auth_headers, "produced_fermentation", "100", "2024-03-04")
    await _post_tx(client, auth_headers, "bulk_bottled", "40", "2024-03-20")
    await _post_tx(client, auth_headers, "bottled_produced", "40", "2024-03-20")

    generated = await client.post(
        "/api/v1/ttb/reports/generate",
        json={"period_start": "2024-03-01", "period_end": "2024-03-31"},
        headers=auth_headers,
    )
    assert generated.status_code == 200
    report = generated.json()
    assert report["summary"]["total_bulk_produced"] == 100.0
    assert report["summary"]["total_bulk_on_hand"] == 60.0
    assert report["summary"]["total_bottled_on_hand"] == 40.0
    assert report["transaction_count"] == 3

    april = await client.post(
        "/api/v1/ttb/reports/generate",
        json={"period_start": "2024-04-01", "period_end": "2024-04-30"},
        headers=auth_headers,
    )
    assert april.json()["bulk"]["additions"][0]["values"]["table_wine_16"] == 60.0

    saved = await client.post(
        "/api/v1/ttb/reports",
        json={"period_start": "2024-03-01", "period_end": "2024-03-31"},
        headers=auth_headers,
    )
    assert saved.status_code == 200
    report_id = saved.json()["id"]
    assert saved.json()["status"] == "draft"
    assert saved.json()["report_data"]["summary"]["total_bulk_on_hand"] == 60.0

    by_period = await client.get(
        "/api/v1/ttb/reports/by-period",
        params={"period_start": "2024-03-01", "period_end": "2024-03-31"},
        headers=auth_headers,
    )
    assert by_period.json()["id"] == report_id

    listed = await client.get("/api/v1/ttb/reports", params={"year": 2024}, headers=auth_headers)
    assert [r["id"] for r in listed.json()] == [report_id]

    finalized = await client.patch(
        f"/api/v1/ttb/reports/{report_id}/status",
        json={"status": "finalized"},
        headers=auth_headers,
    )
    assert finalized.json()["status"] == "finalized"

    not_deletable = await client.delete(f"/api/v1/ttb/reports/{report_id}", headers=auth_headers)
    assert not_deletable.status_code == 409

    submitted = await client.patch(
        f"/api/v1/ttb/reports/{report_id}/status",
        json={"status": "submitted", "confirmation_number": "TTB-2024-03"},
        headers=auth_headers,
    )
    body = submitted.json()
    assert body["status"] == "submitted"
    assert body["confirmation_number"] == "TTB-2024-03"
    assert body["submitted_at"] is not None

    reopen = await client.patch(
        f"/api/v1/ttb/reports/{report_id}/status", json={"status": "draft"}, headers=auth_headers
    )
    assert reopen.status_code == 409

    resave = await client.post(
        "/api/v1/ttb/reports",
        json={"period_start": "2024-03-01", "period_end": "2024-03-31"},
        headers=auth_headers,
    )
    assert resave.status_code == 409


async def test_export_pdf_and_json(client, auth_headers):
    saved_registration = await client.put(
        "/api/v1/ttb/registration", json=REGISTRATION, headers=auth_headers
    )
    assert saved_registration.status_code == 200
    assert saved_registration.json()["ein"] == "12-3456789"

    await _post_tx(client, auth_headers, "produced_fermentation", "80", "2024-06-02")

    pdf = await client.post(
        "/api/v1/ttb/reports/export",
        json={"period_start": "2024-06-01", "period_end": "2024-06-30", "format": "pdf"},
        headers=auth_headers,
    )
    assert pdf.status_code == 200
    body = pdf.json()
    assert body["format"] == "pdf"
    assert base64.b64decode(body["content"]).startswith(b"%PDF")
    assert body["file_name"].endswith(".pdf")

    as_json = await client.post(
        "/api/v1/ttb/reports/export",
        json={"period_start": "2024-06-01", "period_end": "2024-06-30", "format": "json"},
        headers=auth_headers,
    )
    assert as_json.json()["data"]["summary"]["total_bulk_produced"] == 80.0

    saved = await client.post(
        "/api/v1/ttb/reports",
        json={"period_start": "2024-06-01", "period_end": "2024-06-30"},
        headers=auth_headers,
    )
    exported = await client.get(
        f"/api/v1/ttb/reports/{saved.json()['id']}/export", headers=auth_headers
    )
    assert exported.status_code == 200
    assert exported.json()["format"] == "pdf"


async def test_registration_validation(client, auth_headers):
    empty = await client.get("/api/v1/ttb/registration", headers=auth_headers)
    assert empty.status_code == 200
    assert empty.json() is None

    invalid = await client.put(
        "/api/v1/ttb/registration",
        json={**REGISTRATION, "registry_number": "123", "premises_state": "ca1"},
        headers=auth_headers,
    )
    assert invalid.status_code == 422
    assert set(invalid.json()["details"]) == {"registry_number", "premises_state"}

    await client.put("/api/v1/ttb/registration", json=REGISTRATION, headers=auth_headers)
    removed = await client.delete("/api/v1/ttb/registration", headers=auth_headers)
    assert removed.status_code == 204
    assert (await client.get("/api/v1/ttb/registration", headers=auth_headers)).json() is None


async def test_batch_tax_classes_and_inventory(client, auth_headers):
    for name, abv, status in (
        ("Light", "12", "aging"),
        ("Port", "19", "aging"),
        ("Must", "0", "fermenting"),
    ):
        await client.post(
            "/api/v1/lots/",
            json={
                "name": name,
                "current_alcohol_pct": abv,
                "status": status,
                "current_volume_gallons": "50",
            },
            headers=auth_headers,
        )

    batch = await client.post("/api/v1/ttb/tax-classes/recalculate", headers=auth_headers)
    assert batch.status_code == 200
    assert batch.json()["examined"] == 3
    assert batch.json()["updated"] == 0

    inventory = await client.get("/api/v1/ttb/inventory/bulk", headers=auth_headers)
    body = inventory.json()
    assert Decimal(body["total_gallons"]) == Decimal("150")
    assert body["by_tax_class"]["table_wine_21"]["lot_count"] == 1

    fermentations = await client.get("/api/v1/ttb/inventory/fermentations", headers=auth_headers)
    assert fermentations.json()["table_wine_16"]["lot_count"] == 1


async def test_reference_data(client, auth_headers):
    tax_classes = (await client.get("/api/v1/ttb/reference/tax-classes", headers=auth_headers)).json()
    assert [tc["value"] for tc in tax_classes][:3] == [
        "table_wine_16",
        "table_wine_21",
        "table_wine_24",
    ]
    types = (await client.get("/api/v1/ttb/reference/transaction-types", headers=auth_headers)).json()
    bottled = next(t for t in types if t["value"] == "bulk_bottled")
    assert bottled["form_line"] == "A-13"

    periods = await client.get(
        "/api/v1/ttb/periods", params={"period_type": "annual", "years_back": 1}, headers=auth_headers
    )
    assert len(periods.json()) == 2

    converted = await client.get(
        "/api/v1/ttb/conversions", params={"value": "12", "unit": "bottles"}, headers=auth_headers
    )
    assert Decimal(converted.json()["gallons"]) == Decimal("2.3775")
