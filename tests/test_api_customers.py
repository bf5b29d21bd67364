"""Tests for /api/v1/customers and /api/v1/projects endpoints."""

import uuid

import pytest


@pytest.mark.asyncio
async def test_customer_crud(client):
    r = await client.post(
        "/api/v1/customers", json={"name": "Acme", "contact_email": "ops@acme-corp.com"}
    )
    assert r.status_code == 201
    customer = r.json()

    r = await client.patch(f"/api/v1/customers/{customer['id']}", json={"contact_phone": "555"})
    assert r.status_code == 200
    assert r.json()["contact_phone"] == "555"
    assert r.json()["name"] == "Acme"

    r = await client.delete(f"/api/v1/customers/{customer['id']}")
    assert r.status_code == 204
    assert (await client.get(f"/api/v1/customers/{customer['id']}")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["nope", "a@b", "x@localhost", "foo@bar..com"])
async def test_customer_email_is_checked(client, email):
    r = await client.post("/api/v1/customers", json={"name": "Acme", "contact_email": email})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_customer_email_patch_is_checked(client):
    customer = (await client.post("/api/v1/customers", json={"name": "Acme"})).json()
    r = await client.patch(
        f"/api/v1/customers/{customer['id']}", json={"contact_email": "ops@nodot"}
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_customer_assets(client):
    customer = (await client.post("/api/v1/customers", json={"name": "Acme"})).json()
    await client.post("/api/v1/assets", json={"name": "mine", "customer_id": customer["id"]})
    await client.post("/api/v1/assets", json={"name": "other"})

    r = await client.get(f"/api/v1/customers/{customer['id']}/assets")
    assert [a["name"] for a in r.json()["items"]] == ["mine"]


@pytest.mark.asyncio
async def test_project_crud(client):
    customer = (await client.post("/api/v1/customers", json={"name": "Acme"})).json()

    r = await client.post(
        "/api/v1/projects", json={"name": "Migration", "customer_id": customer["id"]}
    )
    assert r.status_code == 201
    project = r.json()
    assert project["status"] == "planning"

    r = await client.patch(f"/api/v1/projects/{project['id']}", json={"status": "active"})
    assert r.json()["status"] == "active"

    r = await client.get("/api/v1/projects", params={"customer_id": customer["id"]})
    assert r.json()["total"] == 1

    r = await client.delete(f"/api/v1/projects/{project['id']}")
    assert r.status_code == 204


@pytest.mark.asyncio
async def test_project_unknown_customer(client):
    r = await client.post(
        "/api/v1/projects", json={"name": "x", "customer_id": str(uuid.uuid4())}
    )
    assert r.status_code == 404
