import os
from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("CREATE_SCHEMA", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from booking_core.api.dependencies import get_session  # noqa: E402
from booking_core.db.models import Base  # noqa: E402
from booking_core.main import app  # noqa: E402


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(
        bind=db_engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def utc():
    def _utc(*args) -> datetime:
        return datetime(*args, tzinfo=timezone.utc)

    return _utc


@pytest.fixture
def booking_payload():
    return {
        "reference_code": "KC-1001",
        "client_name": "Jane Doe",
        "client_email": "jane@example.com",
        "car_model": "Range Rover Sport",
        "car_plate": "GE 12345",
        "delivery_datetime": "2024-01-01T10:00:00Z",
        "collection_datetime": "2024-01-04T10:00:00Z",
        "rental_day_hour_tolerance": 2,
        "daily_rate": "250.00",
        "amount_total": "1000.00",
        "payment_amount_percent": 30,
        "security_deposit_amount": "2000.00",
        "status": "confirmed",
    }


def pytest_configure(config):
    config.addinivalue_line("markers", "api: test goes through the HTTP layer")
    config.addinivalue_line("markers", "db: test uses the database")
