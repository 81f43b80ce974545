"""
Pytest configuration for Staybook tests
"""
import itertools

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from app.db.base import Base
from app.db.session import create_engine_for, get_db
from app.main import app

_emails = itertools.count(1)


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite file per test"""
    eng = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    """API client with get_db pointed at the test database"""

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user; returns (user_id, auth headers)"""

    async def _register(name="Ann"):
        email = f"user{next(_emails)}@staybook.io"
        resp = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": "secret123"},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}

    return _register


@pytest.fixture
def listing_payload():
    def _payload(**overrides):
        data = {
            "category": "Beach",
            "location": {"value": "PT", "label": "Portugal", "latlng": [39.5, -8.0], "region": "Europe"},
            "guest_count": 4,
            "room_count": 2,
            "bathroom_count": 1,
            "image_src": "/images/beach.jpg",
            "title": "Beach house",
            "description": "Steps from the sea",
            "price": 100,
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture
def create_listing(client, listing_payload):
    async def _create(headers, **overrides):
        resp = await client.post("/api/listings", json=listing_payload(**overrides), headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
