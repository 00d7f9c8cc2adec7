"""
Pytest fixtures for testing
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from periodic_calendar.infrastructure.db.session import Base
from periodic_calendar.infrastructure.db import models  # noqa: F401  registers tables on Base.metadata


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across threads (TestClient runs sync routes in a pool)."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sample_account_id():
    """Sample account ID for tests"""
    return 1


@pytest.fixture
def fixed_today():
    return date(2024, 3, 13)


@pytest.fixture
def client(db_engine, sample_account_id, fixed_today):
    """TestClient wired to the in-memory database, account and a fixed 'today'"""
    from periodic_calendar.api.deps import get_account_id, get_db, get_today
    from periodic_calendar.main import create_app

    app = create_app()
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)

    def _override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_account_id] = lambda: sample_account_id
    app.dependency_overrides[get_today] = lambda: fixed_today

    with TestClient(app) as test_client:
        yield test_client
