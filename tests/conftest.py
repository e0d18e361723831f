"""Pytest configuration and fixtures."""

import os

# Cheap hashes and no stray database file; must be set before the app is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from users_api.database import Base, get_db
from users_api.models.user import User  # noqa: F401
from users_api.schemas.user import UserCreate
from users_api.services.user import UserService


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency."""
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session) -> dict:
    """Create a test user and return its row plus the plaintext password."""
    row = UserService().create_user(
        db_session,
        UserCreate(
            email="test@example.com",
            password="password123",
            first_name="Test",
            last_name="User",
            role="user",
            is_active=True,
        ),
    )
    return {**row, "password": "password123"}
