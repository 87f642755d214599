import os

# must be set before dashboard.database builds its engine
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from dashboard.database import Base, get_session
from dashboard.main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def session_factory(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}"

    sync_engine = create_engine(url.replace("+aiosqlite", ""))
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(url, poolclass=NullPool)

    # SQLite only honours ON DELETE CASCADE with foreign keys switched on
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def api_app(session_factory):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_app):
    # no context manager: the startup hook would create tables on the real engine
    return TestClient(api_app)


@pytest.fixture
def make_user(client):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        payload = {
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "password": "secret-password",
            "role": "customer",
            "status": "active",
        }
        payload.update(overrides)
        r = client.post("/api/users", json=payload)
        assert r.status_code == 201, r.text
        return r.json()["user"]

    return _make


@pytest.fixture
def make_product(client):
    def _make(**overrides):
        payload = {
            "name": "Smart Watch",
            "price": 249.99,
            "stock": 10,
            "category": "Electronics",
        }
        payload.update(overrides)
        r = client.post("/api/products", json=payload)
        assert r.status_code == 201, r.text
        return r.json()["product"]

    return _make


@pytest.fixture
def make_order(client):
    def _make(user, items, status="completed", **overrides):
        payload = {
            "user_id": user["id"],
            "status": status,
            "payment_method": "Credit Card",
            "shipping_address": "1 Main St",
            "billing_address": "1 Main St",
            "items": [
                {"product_id": product["id"], "quantity": qty, "price": product["price"]}
                for product, qty in items
            ],
        }
        payload.update(overrides)
        r = client.post("/api/orders", json=payload)
        assert r.status_code == 201, r.text
        return r.json()["order"]

    return _make
