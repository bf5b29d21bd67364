"""Tests for data center, rack and placement endpoints."""

import uuid

import pytest
import pytest_asyncio

API = "/api/v1"


@pytest_asyncio.fixture
async def dc(client):
    r = await client.post(f"{API}/data-centers", json={"name": "DC1", "location": "Paris"})
    assert r.status_code == 201
    return r.json()


async def _rack(client, dc, **overrides):
    payload = {
        "name": "R1",
        "data_center_id": dc["id"],
        "row_position": "A",
        "column_position": "1",
    }
    payload.update(overrides)
    return await client.post(f"{API}/racks", json=payload)


async def _asset(client, name, height=1):
    r = await client.post(f"{API}/assets", json={"name": name, "height_units": height})
    assert r.status_code == 201
    return r.json()


# ── Data centers ──────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_data_center_crud(client, dc):
    r = await client.patch(f"{API}/data-centers/{dc['id']}", json={"power_capacity_kw": 250})
    assert r.status_code == 200
    assert r.json()["power_capacity_kw"] == 250
    assert r.json()["name"] == "DC1"

    r = await client.get(f"{API}/data-centers")
    assert r.json()["total"] == 1

    r = await client.delete(f"{API}/data-centers/{dc['id']}")
    assert r.status_code == 204
    r = await client.get(f"{API}/data-centers/{dc['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_data_center_with_racks_cannot_be_deleted(client, dc):
    await _rack(client, dc)
    r = await client.delete(f"{API}/data-centers/{dc['id']}")
    assert r.status_code == 409

    r = await client.get(f"{API}/data-centers/{dc['id']}/racks")
    assert r.json()["total"] == 1


# ── Racks ─────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_rack_defaults_to_42u(client, dc):
    r = await _rack(client, dc)
    assert r.status_code == 201
    assert r.json()["height_units"] == 42
    assert r.json()["status"] == "available"


@pytest.mark.asyncio
async def test_create_rack_unknown_data_center(client):
    r = await _rack(client, {"id": str(uuid.uuid4())})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_grid_position_is_unique(client, dc):
    assert (await _rack(client, dc)).status_code == 201
    r = await _rack(client, dc, name="R2")
    assert r.status_code == 409

    r2 = await _rack(client, dc, name="R2", column_position="2")
    assert r2.status_code == 201
    r = await client.patch(f"{API}/racks/{r2.json()['id']}", json={"column_position": "1"})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_rack_list_filters(client, dc):
    await _rack(client, dc)
    await _rack(client, dc, name="R2", column_position="2", status="maintenance")

    r = await client.get(f"{API}/racks", params={"status": "maintenance"})
    assert [rk["name"] for rk in r.json()["items"]] == ["R2"]
    r = await client.get(f"{API}/racks", params={"data_center_id": dc["id"]})
    assert r.json()["total"] == 2


@pytest.mark.asyncio
async def test_rack_of_four_placement(client, dc):
    rack = (await _rack(client, dc, height_units=4)).json()
    x = await _asset(client, "X", height=2)
    y = await _asset(client, "Y", height=2)

    r = await client.put(
        f"{API}/assets/{x['id']}/placement", json={"rack_id": rack["id"], "start_unit": 1}
    )
    assert r.status_code == 200
    assert r.json()["rack_position"] == 1

    r = await client.put(
        f"{API}/assets/{y['id']}/placement", json={"rack_id": rack["id"], "start_unit": 2}
    )
    assert r.status_code == 409
    body = r.json()
    assert "X" in body["detail"]
    assert body["conflicting_asset_id"] == x["id"]

    r = await client.get(f"{API}/assets/{y['id']}")
    assert r.json()["rack_id"] is None

    r = await client.put(
        f"{API}/assets/{y['id']}/placement", json={"rack_id": rack["id"], "start_unit": 3}
    )
    assert r.status_code == 200

    r = await client.get(f"{API}/racks/{rack['id']}/layout")
    layout = r.json()
    assert layout["used_units"] == 4
    assert layout["free_units"] == []
    assert [(s["asset_name"], s["start_unit"], s["end_unit"]) for s in layout["spans"]] == [
        ("X", 1, 2),
        ("Y", 3, 4),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("start", [0, 4])
async def test_placement_outside_rack(client, dc, start):
    rack = (await _rack(client, dc, height_units=4)).json()
    asset = await _asset(client, "tall", height=2)

    r = await client.put(
        f"{API}/assets/{asset['id']}/placement", json={"rack_id": rack["id"], "start_unit": start}
    )
    assert r.status_code == 422
    assert r.json()["error"] == "FitError"


@pytest.mark.asyncio
async def test_move_within_rack_ignores_own_span(client, dc):
    rack = (await _rack(client, dc, height_units=4)).json()
    asset = await _asset(client, "A", height=2)
    url = f"{API}/assets/{asset['id']}/placement"

    assert (await client.put(url, json={"rack_id": rack["id"], "start_unit": 1})).status_code == 200
    r = await client.put(url, json={"rack_id": rack["id"], "start_unit": 2})
    assert r.status_code == 200
    assert r.json()["rack_position"] == 2


@pytest.mark.asyncio
async def test_remove_from_rack_keeps_others(client, dc):
    rack = (await _rack(client, dc, height_units=10)).json()
    a = await _asset(client, "A", height=2)
    b = await _asset(client, "B", height=2)
    await client.put(f"{API}/assets/{a['id']}/placement", json={"rack_id": rack["id"], "start_unit": 1})
    await client.put(f"{API}/assets/{b['id']}/placement", json={"rack_id": rack["id"], "start_unit": 5})

    r = await client.delete(f"{API}/assets/{a['id']}/placement")
    assert r.status_code == 200
    assert r.json()["rack_id"] is None
    assert r.json()["rack_position"] is None

    r = await client.get(f"{API}/assets/{b['id']}")
    assert r.json()["rack_position"] == 5

    # removing again is harmless
    r = await client.delete(f"{API}/assets/{a['id']}/placement")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_rack_with_assets_cannot_be_deleted_or_shrunk(client, dc):
    rack = (await _rack(client, dc, height_units=10)).json()
    asset = await _asset(client, "A", height=2)
    await client.put(
        f"{API}/assets/{asset['id']}/placement", json={"rack_id": rack["id"], "start_unit": 7}
    )

    r = await client.delete(f"{API}/racks/{rack['id']}")
    assert r.status_code == 409

    r = await client.patch(f"{API}/racks/{rack['id']}", json={"height_units": 6})
    assert r.status_code == 422
    r = await client.patch(f"{API}/racks/{rack['id']}", json={"height_units": 8})
    assert r.status_code == 200

    await client.delete(f"{API}/assets/{asset['id']}/placement")
    r = await client.delete(f"{API}/racks/{rack['id']}")
    assert r.status_code == 204
