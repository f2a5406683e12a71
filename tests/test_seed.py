import pytest
from decimal import Decimal

from sqlalchemy import inspect

from rentaldb.errors import DomainCheckViolation
from rentaldb.models import Booking, Payment, Property, Review, User
from rentaldb.seed_data import ALICE, BOB, BOOKING_COTTAGE, COZY_COTTAGE, SAMPLE
from rentaldb.services import records
from rentaldb.services.seed import sample_rows, seed_sample_data

EXPECTED = {
    "users": 3,
    "locations": 2,
    "property_types": 2,
    "amenities": 3,
    "properties": 2,
    "property_amenities": 4,
    "bookings": 2,
    "payment_methods": 2,
    "payments": 2,
    "reviews": 2,
    "messages": 2,
}


def test_seed_loads_every_table(db_session):
    assert seed_sample_data(db_session, password="secret") == EXPECTED


def test_seed_is_skipped_when_users_exist(db_session):
    seed_sample_data(db_session)
    assert seed_sample_data(db_session) == EXPECTED


def test_seed_rows_satisfy_invariants(db_session):
    seed_sample_data(db_session, password="secret")

    for booking in db_session.query(Booking):
        assert booking.end_date > booking.start_date
        assert booking.total_price == booking.property.price_per_night * booking.nights
    for payment in db_session.query(Payment):
        assert payment.amount == payment.booking.total_price
        assert payment.payment_method.user_id == payment.booking.user_id
    for review in db_session.query(Review):
        assert 1 <= review.rating <= 5

    cottage = db_session.get(Property, COZY_COTTAGE)
    assert cottage.owner.id == ALICE
    assert cottage.location.city == "Springfield"
    assert {a.amenity_name for a in cottage.amenities} == {"wifi", "fireplace"}
    assert db_session.get(Booking, BOOKING_COTTAGE).payment.amount == Decimal("480.00")
    assert {u.role for u in db_session.query(User)} == {"host", "guest", "admin"}


def test_seeded_users_can_log_in(db_session):
    seed_sample_data(db_session, password="secret")
    assert records.authenticate(db_session, "bob@example.com", "secret").id == BOB


def test_properties_reference_location_instead_of_embedding_it(engine):
    columns = {c["name"] for c in inspect(engine).get_columns("properties")}
    assert "location_id" in columns
    assert not columns & {"location", "city", "state", "country", "postal_code"}


def test_sample_rows_do_not_mutate_module_data():
    rows = sample_rows("secret")
    assert all("password_hash" in user for user in rows["users"])
    assert all("password_hash" not in user for user in SAMPLE["users"])


def test_seed_is_all_or_nothing(db_session, monkeypatch):
    def rows_with_self_message(password=None):
        rows = sample_rows(password)
        last = rows["messages"][-1]
        last["recipient_id"] = last["sender_id"]
        return rows

    monkeypatch.setattr("rentaldb.services.seed.sample_rows", rows_with_self_message)
    with pytest.raises(DomainCheckViolation):
        seed_sample_data(db_session)
    assert set(records.table_counts(db_session).values()) == {0}
