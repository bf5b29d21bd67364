"""Tests for /api/v1/assets endpoints."""

import uuid

import pytest

ASSETS = "/api/v1/assets"


@pytest.mark.asyncio
async def test_create_and_get_asset(client):
    r = await client.post(
        ASSETS,
        json={"name": "srv-01", "asset_tag": "AT-001", "manufacturer": "Dell", "height_units": 2},
    )
    assert r.status_code == 201
    asset = r.json()
    assert asset["status"] == "active"
    assert asset["rack_id"] is None

    r = await client.get(f"{ASSETS}/{asset['id']}")
    assert r.status_code == 200
    assert r.json()["asset_tag"] == "AT-001"


@pytest.mark.asyncio
async def test_asset_validation(client):
    assert (await client.post(ASSETS, json={})).status_code == 422
    assert (await client.post(ASSETS, json={"name": "x", "height_units": 0})).status_code == 422
    r = await client.post(
        ASSETS,
        json={"name": "x", "purchase_date": "2024-05-01", "warranty_expiry": "2023-05-01"},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_asset_tag_is_unique(client):
    await client.post(ASSETS, json={"name": "a", "asset_tag": "T1"})
    r = await client.post(ASSETS, json={"name": "b", "asset_tag": "T1"})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_unknown_customer_reference(client):
    r = await client.post(ASSETS, json={"name": "a", "customer_id": str(uuid.uuid4())})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_list_filters_and_search(client):
    await client.post(ASSETS, json={"name": "web-01", "serial_number": "SN-AAA"})
    await client.post(ASSETS, json={"name": "db-01", "status": "maintenance"})

    r = await client.get(ASSETS, params={"q": "aaa"})
    assert [a["name"] for a in r.json()["items"]] == ["web-01"]

    r = await client.get(ASSETS, params={"status": "maintenance"})
    assert r.json()["total"] == 1


@pytest.mark.asyncio
async def test_unracked_lists_active_assets_only(client):
    await client.post(ASSETS, json={"name": "b-active"})
    await client.post(ASSETS, json={"name": "a-active"})
    await client.post(ASSETS, json={"name": "retired", "status": "retired"})

    r = await client.get(f"{ASSETS}/unracked")
    assert r.status_code == 200
    assert [a["name"] for a in r.json()["items"]] == ["a-active", "b-active"]


@pytest.mark.asyncio
async def test_patch_asset(client):
    asset = (await client.post(ASSETS, json={"name": "a"})).json()

    r = await client.patch(f"{ASSETS}/{asset['id']}", json={"notes": "spare", "name": None})
    assert r.status_code == 200
    assert r.json()["notes"] == "spare"
    assert r.json()["name"] == "a"


@pytest.mark.asyncio
async def test_growing_racked_asset_checks_neighbours(client):
    dc = (await client.post("/api/v1/data-centers", json={"name": "DC", "location": "x"})).json()
    rack = (
        await client.post(
            "/api/v1/racks",
            json={
                "name": "R",
                "data_center_id": dc["id"],
                "row_position": "A",
                "column_position": "1",
                "height_units": 4,
            },
        )
    ).json()
    low = (await client.post(ASSETS, json={"name": "low", "height_units": 1})).json()
    high = (await client.post(ASSETS, json={"name": "high", "height_units": 1})).json()
    for asset, start in ((low, 1), (high, 3)):
        await client.put(
            f"{ASSETS}/{asset['id']}/placement", json={"rack_id": rack["id"], "start_unit": start}
        )

    r = await client.patch(f"{ASSETS}/{low['id']}", json={"height_units": 3})
    assert r.status_code == 409
    assert r.json()["conflicting_asset_id"] == high["id"]

    r = await client.patch(f"{ASSETS}/{low['id']}", json={"height_units": 2})
    assert r.status_code == 200

    r = await client.patch(f"{ASSETS}/{high['id']}", json={"height_units": 3})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_delete_asset(client):
    asset = (await client.post(ASSETS, json={"name": "a"})).json()
    assert (await client.delete(f"{ASSETS}/{asset['id']}")).status_code == 204
    assert (await client.get(f"{ASSETS}/{asset['id']}")).status_code == 404
