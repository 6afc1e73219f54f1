import os

# Point the application engine at a throwaway database before it is created
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from grouptally.main import app
from grouptally.db.base import Base
from grouptally.db.session import get_db
from grouptally.services import group_service

# Setup in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a FastAPI TestClient with overridden database dependency."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def trio(db_session):
    """A group with members Alice (admin), Bob and Carol."""
    group = group_service.create_group(
        name="Goa Trip",
        creator_name="Alice",
        creator_email="alice@example.com",
        creator_payment_address="alice@upi",
        db=db_session
    )
    alice = group.members[0]
    bob = group_service.add_member(group.id, "Bob", email="bob@example.com", db=db_session)
    carol = group_service.add_member(group.id, "Carol", email="carol@example.com", db=db_session)
    return group, alice, bob, carol
