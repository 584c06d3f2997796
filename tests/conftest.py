from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campaign_planner import models  # noqa: F401  -- ensure all models are registered
from campaign_planner.db import Base, get_db
from campaign_planner.main import app
from campaign_planner.services.allocation import AllocationEngine
from campaign_planner.services.catalogue import build_catalogue


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


@pytest.fixture
def engine() -> AllocationEngine:
    """Allocation engine over the built-in defaults, independent of settings."""
    return AllocationEngine(build_catalogue())


# ---------------------------------------------------------------------------
# Sync test DB
# ---------------------------------------------------------------------------


def setup_test_db():
    """Create an in-memory SQLite engine and session factory for sync tests."""
    db_engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    Base.metadata.create_all(db_engine)
    return db_engine, TestingSessionLocal


@pytest.fixture
def db_session():
    _, TestingSessionLocal = setup_test_db()
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    _, TestingSessionLocal = setup_test_db()

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
