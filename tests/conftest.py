"""pytest fixtures shared across all tests."""

from __future__ import annotations

import itertools
import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from automate_dns.dns.reconciler import DnsReconciler
from automate_dns.models.base import Base

# SQLite in-memory, one fresh DB per test function.
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

CF_BASE_URL = "https://cloudflare.test/client/v4"
CF_ZONE = "zone-123"


class FakeCloudflare:
    """In-memory stand-in for the Cloudflare DNS records API.

    Every request is recorded in ``requests``. Set ``fail_lookup`` or
    ``fail_writes`` to a message to make those calls return an error envelope.
    """

    def __init__(self) -> None:
        self.records: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_lookup: str | None = None
        self.fail_writes: str | None = None
        self._ids = itertools.count(1)

    def seed(self, name: str, content: str, *, ttl: int = 1, proxied: bool = False) -> dict:
        record = {
            "id": f"rec-{next(self._ids)}",
            "type": "A",
            "name": name,
            "content": content,
            "ttl": ttl,
            "proxied": proxied,
        }
        self.records[record["id"]] = record
        return record

    @property
    def writes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method in ("POST", "PUT")]

    def bodies(self, method: str) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == method]

    @staticmethod
    def _error(message: str, status_code: int = 400) -> httpx.Response:
        return httpx.Response(
            status_code,
            json={"success": False, "errors": [{"code": 9000, "message": message}], "result": None},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        prefix = f"/client/v4/zones/{CF_ZONE}/dns_records"
        path = request.url.path

        if request.method == "GET" and path == prefix:
            if self.fail_lookup:
                return self._error(self.fail_lookup)
            name = request.url.params.get("name")
            rtype = request.url.params.get("type")
            result = [
                r for r in self.records.values() if r["name"] == name and r["type"] == rtype
            ]
            return httpx.Response(200, json={"success": True, "errors": [], "result": result})

        if request.method == "POST" and path == prefix:
            if self.fail_writes:
                return self._error(self.fail_writes)
            body = json.loads(request.content)
            record = self.seed(
                body["name"], body["content"], ttl=body["ttl"], proxied=body["proxied"]
            )
            return httpx.Response(200, json={"success": True, "errors": [], "result": record})

        if request.method == "PUT" and path.startswith(prefix + "/"):
            if self.fail_writes:
                return self._error(self.fail_writes)
            record_id = path.rsplit("/", 1)[-1]
            if record_id not in self.records:
                return self._error("Record does not exist.", 404)
            self.records[record_id].update(json.loads(request.content))
            return httpx.Response(
                200, json={"success": True, "errors": [], "result": self.records[record_id]}
            )

        return self._error("Unexpected route", 404)


@pytest.fixture
def fake_cloudflare() -> FakeCloudflare:
    return FakeCloudflare()


@pytest.fixture
def reconciler(fake_cloudflare) -> DnsReconciler:
    """A configured reconciler whose HTTP calls go to the fake API."""
    return DnsReconciler(
        "test-token",
        CF_ZONE,
        base_url=CF_BASE_URL,
        transport=httpx.MockTransport(fake_cloudflare.handler),
    )


@pytest_asyncio.fixture
async def engine():
    """Create a fresh in-memory SQLite engine per test function."""
    eng = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Yield an async session bound to the test engine."""
    factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=True)
    async with factory() as session:
        yield session


def _build_app(engine, reconciler):
    from automate_dns.api.app import create_app
    from automate_dns.api.dependencies import get_db, get_dns_reconciler

    app = create_app()
    factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=True)

    async def override_db():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_dns_reconciler] = lambda: reconciler
    return app


@pytest.fixture
def make_app(engine):
    """Build an app against the test DB with a caller-chosen reconciler."""
    return lambda reconciler: _build_app(engine, reconciler)


@pytest.fixture
def app(make_app, reconciler):
    return make_app(reconciler)


@pytest_asyncio.fixture
async def client(app):
    """HTTPX async test client wired to the FastAPI app with a test DB and fake DNS."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
