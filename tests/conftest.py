import pytest
from datetime import date

from passlib.context import CryptContext
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rentaldb.db import Base
import rentaldb.models  # noqa: F401
from rentaldb.services import records

# ---------- TEST FIXTURES ----------

# Use in-memory SQLite for test isolation
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    monkeypatch.setattr("rentaldb.security.pwd_context", CryptContext(schemes=["bcrypt"], bcrypt__rounds=4))


@pytest.fixture
def engine():
    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """A new DB session for each test."""
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = Session()
    yield session
    session.close()

# ---------- TEST DATA HELPERS ----------

@pytest.fixture
def user_factory(db_session):
    def create_user(email, role="guest", first_name="Test", last_name="User", password="Pass12345", **extra):
        return records.create_user(db_session, dict(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            role=role,
            **extra,
        ))
    return create_user


@pytest.fixture
def host(user_factory):
    return user_factory("host@example.com", role="host", first_name="Hannah", last_name="Host")


@pytest.fixture
def guest(user_factory):
    return user_factory("guest@example.com", role="guest", first_name="Gus", last_name="Guest")


@pytest.fixture
def location(db_session):
    return records.create_location(db_session, {"city": "Springfield", "state": "IL", "country": "USA", "postal_code": "62701"})


@pytest.fixture
def cottage_type(db_session):
    return records.create_property_type(db_session, {"type_name": "cottage"})


@pytest.fixture
def listing(db_session, host, location, cottage_type):
    return records.create_property(db_session, {
        "owner_id": host.id,
        "location_id": location.id,
        "property_type_id": cottage_type.id,
        "name": "Cozy Cottage",
        "description": "A small cozy cottage in the woods.",
        "price_per_night": "120.00",
    })


@pytest.fixture
def booking(db_session, listing, guest):
    return records.create_booking(db_session, {
        "property_id": listing.id,
        "user_id": guest.id,
        "start_date": date(2025, 9, 1),
        "end_date": date(2025, 9, 5),
    })


@pytest.fixture
def card(db_session, guest):
    return records.add_payment_method(db_session, {"user_id": guest.id, "method_type": "credit_card", "is_default": True})
