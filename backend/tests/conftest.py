"""Pytest configuration and shared fixtures."""
import random
from datetime import datetime, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from commission_tracker import models  # noqa: F401 - register tables
from commission_tracker.api.parse import get_extractor
from commission_tracker.core.database import Base, get_db
from commission_tracker.main import app
from commission_tracker.services.extractor import MockExtractor
from tests.factories import add_carrier, add_rep, add_statement


@pytest.fixture
def engine():
    """In-memory SQLite shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest.fixture
def api(session_factory):
    """The app wired to the test database and a seeded extractor."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_extractor] = lambda: MockExtractor(random.Random(7))
    return app


@pytest.fixture
def test_client(api) -> TestClient:
    return TestClient(api)


@pytest.fixture
def asgi_transport(api) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=api)


@pytest.fixture
def seeded_db(db_session):
    """Three statements (commissions 100/250/50), three carriers, four reps."""
    base = datetime(2024, 3, 1, 12, 0, 0)
    add_statement(db_session, "aetna_jan.pdf", carrier="Aetna", commission=100, lives=10,
                  created_at=base)
    add_statement(db_session, "cigna_feb.pdf", carrier="Cigna", commission=250, lives=20,
                  created_at=base + timedelta(minutes=1))
    add_statement(db_session, "humana_mar.xlsx", carrier="Humana", commission=50, lives=30,
                  created_at=base + timedelta(minutes=2))
    add_carrier(db_session, "Humana", status="active")
    add_carrier(db_session, "Aetna", status="active")
    add_carrier(db_session, "Cigna", status="flagged")
    add_rep(db_session, "Zoe Walker", total_earnings=90000)
    add_rep(db_session, "Amy Brooks", total_earnings=1000)
    add_rep(db_session, "Carl Diaz", total_earnings=5000)
    add_rep(db_session, "Ben Ortiz", total_earnings=20000)
    return db_session
