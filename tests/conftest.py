"""Pytest configuration and shared fixtures."""

import os

# must be set before gighub.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from gighub.database import Base, SessionLocal, engine
from gighub.main import app
from gighub.seed import seed

API_KEY = "test-key"


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def artist_id() -> int:
    """Seed the genre list and the calling artist; returns the artist's id."""
    session = SessionLocal()
    try:
        return seed(session, api_key=API_KEY, demo_gig=False).id
    finally:
        session.close()


@pytest.fixture
def api_client(artist_id) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth() -> dict:
    """Headers that identify the seeded artist."""
    return {"X-API-Key": API_KEY}
