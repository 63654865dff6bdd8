"""
Pytest configuration file for backend testing.
"""
import os
import sys
from pathlib import Path

# Settings are read at import time; point them at an in-memory database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-suite")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SMTP_SERVER", "")

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest
from fastapi.testclient import TestClient

from core.auth import create_access_token, token_payload_for
from core.database import Base, SessionLocal, engine, get_db
from app.main import app
from modules.orders.api.websocket_tracking import manager
from tests.factories import BaseFactory, UserFactory, AdminUserFactory


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    BaseFactory.bind_session(db)
    try:
        yield db
    finally:
        BaseFactory.reset_session()
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_order_rooms():
    yield
    manager.rooms.clear()
    manager.connection_orders.clear()


@pytest.fixture
def customer(db_session):
    return UserFactory()


@pytest.fixture
def admin(db_session):
    return AdminUserFactory()


def bearer_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(token_payload_for(user))}"}


@pytest.fixture
def auth_headers(customer):
    """Authentication headers for a customer"""
    return bearer_headers(customer)


@pytest.fixture
def admin_headers(admin):
    """Authentication headers for an admin"""
    return bearer_headers(admin)
