"""Shared fixtures: a throwaway SQLite database per test and an in-process app.

Each test gets a fresh file-backed database (tables created and payment terms
seeded the same way the dev bootstrap does), a fake authenticator mapping
bearer tokens to callers, and an httpx AsyncClient talking to the ASGI app.
"""

from __future__ import annotations

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.auth import UserContext
from app.core.config import Settings
from app.core.exceptions import UnauthorizedError
from app.db.base import build_engine, build_session_factory
from app.db.bootstrap import init_models
from app.main import create_app
from app.repositories.vendor import VendorRepository

ENTITY = "entity-1"
OTHER_ENTITY = "entity-2"

DEADLINE_SECONDS = 0.2
SLOW_STORE_SECONDS = 1.0

USERS = {
    "token-alice": UserContext(user_id="user-alice", entity_id=ENTITY),
    "token-bob": UserContext(user_id="user-bob", entity_id=OTHER_ENTITY),
}


class FakeAuthenticator:
    """Resolves the fixed tokens in USERS; anything else is rejected."""

    async def authenticate(self, token: str) -> UserContext:
        try:
            return USERS[token]
        except KeyError:
            raise UnauthorizedError("invalid or expired token") from None


class FakeObligations:
    """Obligations checker whose answer tests can flip per vendor."""

    def __init__(self):
        self.blocked: set[str] = set()

    async def has_open_obligations(self, vendor_id: str, entity_id: str) -> bool:
        return vendor_id in self.blocked


def vendor_payload(**overrides) -> dict:
    payload = {
        "entity_id": ENTITY,
        "vendor_code": "V001",
        "vendor_name": "Acme Supplies",
        "vendor_type": "supplier",
        "country": "US",
        "currency": "USD",
        "payment_terms": "NET30",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'vendors_test.db'}",
        DB_AUTO_CREATE=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
async def engine(test_settings):
    engine = build_engine(test_settings)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def obligations() -> FakeObligations:
    return FakeObligations()


@pytest.fixture
def app(test_settings, session_factory, obligations):
    return create_app(
        test_settings,
        session_factory=session_factory,
        authenticator=FakeAuthenticator(),
        obligations=obligations,
    )


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": "Bearer token-alice"}


@pytest.fixture
async def deadline_client(test_settings, session_factory, obligations):
    """Client for an app sharing the test database but with a short request deadline."""
    app = create_app(
        test_settings.model_copy(update={"request_timeout_seconds": DEADLINE_SECONDS}),
        session_factory=session_factory,
        authenticator=FakeAuthenticator(),
        obligations=obligations,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def slow_balance_update(monkeypatch):
    """Balance updates write, then stall past the deadline before returning."""
    real_adjust = VendorRepository.adjust_balance

    async def slow_adjust(self, vendor_id, entity_id, delta):
        updated = await real_adjust(self, vendor_id, entity_id, delta)
        await asyncio.sleep(SLOW_STORE_SECONDS)
        return updated

    monkeypatch.setattr(VendorRepository, "adjust_balance", slow_adjust)
