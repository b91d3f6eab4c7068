"""
Pytest fixtures for the Stores API tests.
The app runs against a single in-memory SQLite database; tables are
recreated for every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from stores_api.database import SessionLocal
from stores_api.init_db import drop_tables, init_tables
from stores_api.main import app


@pytest.fixture
def tables():
    init_tables()
    yield
    drop_tables()


@pytest.fixture
def db(tables):
    """Database session for exercising the storage layer directly"""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(tables):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unsafe_client(tables):
    """Client that returns 500 responses instead of re-raising server errors"""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def store_payload():
    return {"name": "Acme", "address": "1 Main St"}


@pytest.fixture
def created_store(client, store_payload):
    """Create a store through the API and return its JSON representation"""
    response = client.post("/stores", json={**store_payload, "email": "acme@example.com"})
    assert response.status_code == 201
    return response.json()
