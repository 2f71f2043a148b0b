"""
Pytest fixtures for the JewelBox test suite.

Provides:
- An in-memory SQLite session per test (tables created fresh each time)
- A FastAPI TestClient with the DB, principal and blob store overridden
- Small factories for items, categories and inventory units

Environment Variables are set before jewelbox is imported so the app
engine never points at a real database.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

from decimal import Decimal
from typing import Generator, List, Optional
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, pool
from sqlalchemy.orm import Session, sessionmaker

import jewelbox.models  # noqa: F401  registers tables
from jewelbox.database import Base, get_db
from jewelbox.dependencies import get_current_user
from jewelbox.main import app
from jewelbox.schemas.catalog import CategoryCreate, ItemCreate
from jewelbox.schemas.inventory import InventoryCreate
from jewelbox.services import catalog_service
from jewelbox.services.inventory_service import InventoryService
from jewelbox.services.storage_service import get_blob_store

# Principal stamped on every record created by the tests
TEST_USER_ID = uuid4()


class FakeBlobStore:
    """In-memory stand-in for Supabase Storage."""

    def __init__(self):
        self.uploads: List[tuple] = []

    def upload(self, content: bytes, content_type: str, filename: Optional[str] = None) -> str:
        self.uploads.append((content, content_type, filename))
        return f"https://storage.test/images/inventory/{len(self.uploads)}_{filename or 'image'}"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=pool.StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def client(db, blob_store) -> Generator[TestClient, None, None]:
    """Authenticated client: every request runs as TEST_USER_ID."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_current_user] = lambda: TEST_USER_ID
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db) -> Generator[TestClient, None, None]:
    """Client with the real token check in place."""
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def item(db):
    return catalog_service.create_item(db, ItemCreate(name="Ring", abbreviation="rg"), user_id=TEST_USER_ID)


@pytest.fixture
def category(db):
    return catalog_service.create_category(db, CategoryCreate(name="Rent"))


@pytest.fixture
def make_unit(db, item):
    """Factory: make_unit(net_weight=..., **overrides) -> committed InventoryUnit."""
    def _make(**overrides):
        data = {"item_id": item.id, "net_weight": Decimal("10")}
        data.update(overrides)
        return InventoryService.create_inventory(db, InventoryCreate(**data), user_id=TEST_USER_ID)
    return _make
