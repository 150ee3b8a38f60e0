"""Basic API smoke tests — health, service descriptor, routing errors."""

import pytest


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


@pytest.mark.asyncio
async def test_service_descriptor(client):
    r = await client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["service"] == "automate-dns"
    assert "POST   /resolvers" in data["endpoints"]
    assert len(data["endpoints"]) == 6


@pytest.mark.asyncio
async def test_json_content_type(client):
    r = await client.get("/health")
    assert r.headers["content-type"] == "application/json; charset=utf-8"


@pytest.mark.asyncio
async def test_unknown_route(client):
    r = await client.get("/does/not/exist")
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}
    assert r.headers["content-type"] == "application/json; charset=utf-8"


@pytest.mark.asyncio
async def test_unsupported_method_is_not_found(client):
    r = await client.post("/resolvers/1", json={})
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}
    assert "allow" not in r.headers


@pytest.mark.asyncio
async def test_trailing_slash_is_not_redirected(client):
    r = await client.get("/resolvers/")
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}


@pytest.mark.asyncio
async def test_resolvers_list_empty(client):
    r = await client.get("/resolvers")
    assert r.status_code == 200
    assert r.json() == {"items": [], "limit": 100, "offset": 0, "count": 0}
