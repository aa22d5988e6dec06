import os

# Settings are read at import time; give the app a signing key before importing it.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from campsite_booking import models
from campsite_booking.config import Settings
from campsite_booking.database import Database
from campsite_booking.locks import SpotLocks
from campsite_booking.main import create_app


# ---------- DATABASE FIXTURES ----------

@pytest.fixture
def database(tmp_path):
    """A migrated on-disk SQLite database per test (threads need a real file)."""
    db = Database(f"sqlite:///{tmp_path / 'camping.db'}")
    db.open()
    yield db
    db.close()

@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()

@pytest.fixture
def locks():
    return SpotLocks()


# ---------- TEST DATA HELPERS ----------

@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(name=None, is_owner=False):
        counter["n"] += 1
        user = models.User(
            name=name or f"User {counter['n']}",
            email=f"user{counter['n']}@example.com",
            password="not-a-real-hash",
            is_owner=is_owner
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user

@pytest.fixture
def make_spot(db_session):
    def _make_spot(owner, title="Lakeside Pitch", location="Lake Bled", price=25):
        spot = models.CampingSpot(title=title, location=location, price=price, owner_id=owner.id)
        db_session.add(spot)
        db_session.commit()
        return spot

    return _make_spot

@pytest.fixture
def owner(make_user):
    return make_user(name="Olivia Owner", is_owner=True)

@pytest.fixture
def renter(make_user):
    return make_user(name="Rex Renter")

@pytest.fixture
def spot(make_spot, owner):
    return make_spot(owner)


# ---------- API FIXTURES ----------

@pytest.fixture
def app(tmp_path):
    settings = Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'api.db'}",
        JWT_SECRET_KEY=os.environ["JWT_SECRET_KEY"],
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )
    return create_app(settings)

@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which applies migrations
    with TestClient(app) as client:
        yield client
