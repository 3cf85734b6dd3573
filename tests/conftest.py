import pytest
from passlib.hash import bcrypt
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import DirectoryConfig
from app.db.base import Base
from app.db.database import Database
from app.db.session import build_engine
from app.services.instructor_account import encode_recoverable

# bcrypt's default cost makes every registration slow
FAST_HASH = bcrypt.using(rounds=4)


class FakeGeocoder:
    """Stands in for GoogleMapsGeocoder, answering from a fixed address book."""

    def __init__(self, locations, calls, address, format="json"):
        self.locations = locations
        self.address = address
        self.format = format
        self.api_key = None
        self.coords = None
        calls.append(self)

    def set_api_key(self, key):
        self.api_key = key
        return self

    def geocode(self):
        self.coords = self.locations.get(self.address)
        return self.coords is not None

    def get_latitude(self):
        return self.coords[0] if self.coords else False

    def get_longitude(self):
        return self.coords[1] if self.coords else False


@pytest.fixture
def engine():
    engine = build_engine("sqlite+pysqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db(session):
    return Database(session)


@pytest.fixture
def locations():
    return {
        "AB1 2CD, UK": (57.14, -2.10),
        "AB12CD, UK": (57.145, -2.105),
        "E1 6AN, UK": (51.52, -0.06),
    }


@pytest.fixture
def geocoder_calls():
    return []


@pytest.fixture
def geocoder_factory(locations, geocoder_calls):
    def factory(address, format="json"):
        return FakeGeocoder(locations, geocoder_calls, address, format)
    return factory


@pytest.fixture
def config():
    return DirectoryConfig()


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr("app.services.instructor_account.bcrypt", FAST_HASH)


@pytest.fixture
def add_row(db):
    """Insert an instructor row directly, bypassing registration."""
    def _add(fino, **fields):
        row = {
            "fino": fino,
            "name": f"Instructor {fino}",
            "gender": "M",
            "email": f"instructor{fino}@drivingschool.co.uk",
            "website": "drivingschool.co.uk",
            "password": FAST_HASH.hash("password123"),
            "password_base": encode_recoverable("password123"),
            "active": 1,
            "status": 1,
        }
        row.update(fields)
        assert db.insert("instructors", row)
        return row
    return _add
