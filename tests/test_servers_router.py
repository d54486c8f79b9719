import json
import logging

import httpx
import pytest
import pytest_asyncio
from starlette.requests import Request

from api.servers_router import get_logger, path_address
from exceptions import ConfigurationError, ServerNotFound, StoreError
from main import app, configuration_error
from models.record import ServerRecord
from services.server_store import get_server_store

pytestmark = pytest.mark.asyncio

WIRE = {
    "ip": "play.example.com:7777",
    "hn": "Best RP",
    "pc": 3,
    "pm": 50,
    "gm": "rp",
    "la": "English",
    "pa": False,
    "ru": {"weather": "10"},
    "pl": ["Alice"],
}

class StubStore:
    def __init__(self, servers=None, fail=False):
        self.servers = dict(servers or {})
        self.fail = fail
        self.upserts = []
    async def get(self, address):
        if self.fail:
            raise StoreError("db down")
        if address not in self.servers:
            raise ServerNotFound(f"server '{address}' not found")
        return self.servers[address]
    async def upsert(self, server):
        self.upserts.append(server)
        if self.fail:
            raise StoreError("db down")
        self.servers[server.address] = server
        return server

@pytest.fixture
def stub_store():
    return StubStore({"play.example.com:7777": ServerRecord.model_validate(WIRE)})

@pytest_asyncio.fixture
async def client(stub_store):
    app.dependency_overrides[get_server_store] = lambda: stub_store
    app.dependency_overrides[get_logger] = lambda: logging.getLogger("tests.servers")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()

def _scope(path_params):
    return {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("test", 80),
        "path": "/servers/",
        "root_path": "",
        "query_string": b"",
        "headers": [],
        "path_params": path_params,
    }

async def test_get_server(client):
    r = await client.get("/servers/play.example.com:7777")
    assert r.status_code == 200
    assert r.json() == WIRE

async def test_get_invalid_address(client):
    r = await client.get("/servers/play.example.com:80")
    assert r.status_code == 400
    assert r.json()["detail"] == ["port 80 falls within reserved or ephemeral range"]

async def test_get_empty_address(client):
    r = await client.get("/servers/")
    assert r.status_code == 400
    assert r.json()["detail"] == ["address is empty"]

async def test_get_unknown_server(client):
    r = await client.get("/servers/other.example.com:7777")
    assert r.status_code == 404
    assert "not found" in r.json()["detail"]

async def test_get_store_failure(client, stub_store):
    stub_store.fail = True
    r = await client.get("/servers/play.example.com:7777")
    assert r.status_code == 500

async def test_post_server(client, stub_store):
    body = dict(WIRE, ip="new.example.com:7777", hn="New Server")
    r = await client.post("/servers/new.example.com:7777", json=body)
    assert r.status_code == 200
    assert r.json() == body
    assert stub_store.servers["new.example.com:7777"].hostname == "New Server"

async def test_post_malformed_json(client, stub_store):
    r = await client.post("/servers/play.example.com:7777", content=b"{not json")
    assert r.status_code == 400
    assert stub_store.upserts == []

async def test_post_wrong_type(client, stub_store):
    r = await client.post("/servers/play.example.com:7777", json=dict(WIRE, pc="3"))
    assert r.status_code == 400
    assert "pc" in r.json()["detail"]
    assert stub_store.upserts == []

async def test_post_invalid_server_is_not_stored(client, stub_store):
    body = dict(WIRE, hn="", pm=0, gm="")
    r = await client.post("/servers/play.example.com:7777", json=body)
    assert r.status_code == 422
    assert r.json()["detail"] == ["hostname is empty", "maxplayers is empty", "gamemode is empty"]
    assert stub_store.upserts == []

async def test_post_store_failure(client, stub_store):
    stub_store.fail = True
    r = await client.post("/servers/play.example.com:7777", json=WIRE)
    assert r.status_code == 500
    assert r.json()["detail"] == "db down"

async def test_other_methods_not_allowed(client):
    r = await client.delete("/servers/play.example.com:7777")
    assert r.status_code == 405

async def test_missing_address_parameter():
    with pytest.raises(ConfigurationError):
        path_address(Request(_scope({})))

async def test_configuration_error_is_a_500():
    resp = await configuration_error(Request(_scope({})), ConfigurationError("no address"))
    assert resp.status_code == 500
    assert json.loads(resp.body) == {"detail": "no address"}

async def test_get_server_with_scheme(client):
    r = await client.get("/servers/samp://play.example.com:7777")
    assert r.status_code == 200
    assert r.json()["ip"] == "play.example.com:7777"

async def test_get_huge_port(client):
    r = await client.get("/servers/host:" + "9" * 5000)
    assert r.status_code == 400

async def test_get_malformed_host(client):
    r = await client.get("/servers/bad%20host:7777")
    assert r.status_code == 400
    assert r.json()["detail"] == ["failed to parse address 'bad host:7777': invalid character \" \" in host name"]

async def test_post_null_fields_are_a_422(client, stub_store):
    body = dict(WIRE, hn=None, ru=None)
    r = await client.post("/servers/play.example.com:7777", json=body)
    assert r.status_code == 422
    assert r.json()["detail"] == ["hostname is empty"]
    assert stub_store.upserts == []
