"""Tests for /api/v1/ip-addresses ledger endpoints."""

import uuid

import pytest
import pytest_asyncio

ADDRESSES = "/api/v1/ip-addresses"


@pytest_asyncio.fixture
async def addresses(client):
    """Map of ip -> address id for a /29 with gateway 10.0.0.1."""
    r = await client.post(
        "/api/v1/ip-pools",
        json={
            "name": "lab",
            "network_address": "10.0.0.0",
            "prefix_length": 29,
            "gateway": "10.0.0.1",
        },
    )
    pool_id = r.json()["id"]
    r = await client.get(f"/api/v1/ip-pools/{pool_id}/addresses")
    return {a["ip_address"]: a["id"] for a in r.json()["items"]}


@pytest.mark.asyncio
async def test_assign_release_round_trip(client, addresses):
    asset = (await client.post("/api/v1/assets", json={"name": "web-01"})).json()
    addr_id = addresses["10.0.0.2"]

    r = await client.post(
        f"{ADDRESSES}/{addr_id}/assign", json={"asset_id": asset["id"], "hostname": "web-01"}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "assigned"
    assert body["asset_id"] == asset["id"]
    assert body["assignment_date"] is not None

    r = await client.post(f"{ADDRESSES}/{addr_id}/assign", json={"hostname": "web-02"})
    assert r.status_code == 409
    assert r.json()["status"] == "assigned"

    r = await client.post(f"{ADDRESSES}/{addr_id}/release")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "available"
    assert body["asset_id"] is None
    assert body["hostname"] is None
    assert body["assignment_date"] is None


@pytest.mark.asyncio
async def test_assign_unknown(client, addresses):
    r = await client.post(f"{ADDRESSES}/{uuid.uuid4()}/assign", json={})
    assert r.status_code == 404

    r = await client.post(
        f"{ADDRESSES}/{addresses['10.0.0.3']}/assign", json={"asset_id": str(uuid.uuid4())}
    )
    assert r.status_code == 404
    r = await client.get(f"{ADDRESSES}/{addresses['10.0.0.3']}")
    assert r.json()["status"] == "available"


@pytest.mark.asyncio
async def test_reserve(client, addresses):
    addr_id = addresses["10.0.0.4"]

    r = await client.post(f"{ADDRESSES}/{addr_id}/reserve", json={"reason": "  "})
    assert r.status_code == 422
    assert r.json()["error"] == "ValidationError"

    r = await client.post(f"{ADDRESSES}/{addr_id}/reserve", json={"reason": "VIP"})
    assert r.status_code == 200
    assert r.json()["status"] == "reserved"
    assert r.json()["notes"] == "VIP"

    r = await client.post(f"{ADDRESSES}/{addr_id}/assign", json={"hostname": "x"})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_bulk_status(client, addresses):
    ids = [addresses["10.0.0.5"], addresses["10.0.0.6"]]

    r = await client.post(f"{ADDRESSES}/bulk-status", json={"address_ids": ids, "status": "blocked"})
    assert r.status_code == 422

    r = await client.post(
        f"{ADDRESSES}/bulk-status",
        json={"address_ids": ids, "status": "blocked", "reason": "spam source"},
    )
    assert r.status_code == 200
    assert r.json() == {"updated": 2}

    r = await client.post(f"{ADDRESSES}/{ids[0]}/release")
    assert r.status_code == 409

    r = await client.post(
        f"{ADDRESSES}/bulk-status", json={"address_ids": ids, "status": "assigned"}
    )
    assert r.status_code == 422

    r = await client.post(
        f"{ADDRESSES}/bulk-status", json={"address_ids": ids, "status": "available"}
    )
    assert r.status_code == 200
    r = await client.get(f"{ADDRESSES}/{ids[0]}")
    assert r.json()["status"] == "available"


@pytest.mark.asyncio
async def test_ledger_changes_are_logged(client, addresses):
    addr_id = addresses["10.0.0.2"]
    await client.post(f"{ADDRESSES}/{addr_id}/assign", json={"hostname": "db-01"})

    r = await client.get("/api/v1/change-logs", params={"record_id": addr_id})
    items = r.json()["items"]
    assert len(items) == 1
    assert items[0]["table_name"] == "ip_addresses"
    assert items[0]["changes"]["after"]["hostname"] == "db-01"


@pytest.mark.asyncio
async def test_deleting_asset_frees_its_addresses(client, addresses):
    asset = (await client.post("/api/v1/assets", json={"name": "tmp"})).json()
    addr_id = addresses["10.0.0.3"]
    await client.post(f"{ADDRESSES}/{addr_id}/assign", json={"asset_id": asset["id"]})

    r = await client.delete(f"/api/v1/assets/{asset['id']}")
    assert r.status_code == 204

    r = await client.get(f"{ADDRESSES}/{addr_id}")
    assert r.json()["status"] == "available"
    assert r.json()["asset_id"] is None

    r = await client.get("/api/v1/change-logs", params={"record_id": addr_id})
    descriptions = sorted(item["description"] for item in r.json()["items"])
    assert descriptions == [
        "IP address 10.0.0.3 assigned to asset",
        "IP address 10.0.0.3 released (asset tmp deleted)",
    ]

    r = await client.delete(f"/api/v1/assets/{asset['id']}")
    assert r.status_code == 404
