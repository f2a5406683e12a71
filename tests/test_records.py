import pytest
from datetime import date
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.exc import StatementError

from rentaldb.errors import (
    DomainCheckViolation,
    NotNullViolation,
    RecordNotFound,
    ReferentialIntegrityViolation,
    UniquenessViolation,
)
from rentaldb.models import Amenity, Booking, BookingStatus, Message, Property, Review, User
from rentaldb.services import records


# ---------- USERS ----------

def test_create_user_hashes_password(db_session, user_factory):
    user = user_factory("alice@example.com", role="host", first_name="Alice", last_name="Smith")
    assert user.id and len(user.id) == 36
    assert user.password_hash != "Pass12345"
    assert user.full_name == "Alice Smith"
    assert user.created_at is not None
    assert records.authenticate(db_session, "alice@example.com", "Pass12345").id == user.id
    assert records.authenticate(db_session, "alice@example.com", "wrong") is None
    assert records.authenticate(db_session, "nobody@example.com", "Pass12345") is None


def test_reusing_email_fails_and_leaves_count(db_session, user_factory):
    user_factory("bob@example.com")
    with pytest.raises(UniquenessViolation):
        user_factory("bob@example.com", first_name="Other")
    assert db_session.query(User).count() == 1


def test_user_boundary_validation(db_session):
    with pytest.raises(DomainCheckViolation):
        records.create_user(db_session, {
            "first_name": "Eve", "last_name": "Admin", "email": "eve@example.com", "password": "x", "role": "root",
        })
    with pytest.raises(DomainCheckViolation):
        records.create_user(db_session, {
            "first_name": "Eve", "last_name": "Admin", "email": "not-an-email", "password": "x",
        })
    with pytest.raises(NotNullViolation):
        records.create_user(db_session, {"first_name": "Eve", "last_name": "Admin", "password": "x"})
    assert db_session.query(User).count() == 0


def test_get_user_by_email(db_session, host):
    assert records.get_user_by_email(db_session, "host@example.com").id == host.id
    assert records.get_user_by_email(db_session, "missing@example.com") is None


# ---------- PROPERTIES ----------

def test_create_property_links_lookups_and_amenities(db_session, host, location, cottage_type):
    wifi = records.create_amenity(db_session, {"amenity_name": "wifi"})
    kitchen = records.create_amenity(db_session, {"amenity_name": "kitchen"})
    prop = records.create_property(db_session, {
        "owner_id": host.id,
        "location_id": location.id,
        "property_type_id": cottage_type.id,
        "name": "Lake House",
        "description": "By the lake",
        "price_per_night": "150.00",
        "amenity_ids": [wifi.id, kitchen.id],
    })
    assert prop.location.city == "Springfield"
    assert prop.property_type.type_name == "cottage"
    assert {a.amenity_name for a in prop.amenities} == {"wifi", "kitchen"}
    # the association is navigable from both sides
    assert [p.id for p in wifi.properties] == [prop.id]
    assert prop.owner.id == host.id


def test_create_property_rejects_unknown_amenity(db_session, host, location, cottage_type):
    with pytest.raises(ReferentialIntegrityViolation):
        records.create_property(db_session, {
            "owner_id": host.id,
            "location_id": location.id,
            "property_type_id": cottage_type.id,
            "name": "Lake House",
            "description": "By the lake",
            "price_per_night": "150.00",
            "amenity_ids": ["nope"],
        })
    assert db_session.query(Property).count() == 0


@pytest.mark.parametrize("price", ["0", "-5"])
def test_create_property_rejects_non_positive_price(db_session, host, location, cottage_type, price):
    with pytest.raises(DomainCheckViolation):
        records.create_property(db_session, {
            "owner_id": host.id,
            "location_id": location.id,
            "property_type_id": cottage_type.id,
            "name": "Free House",
            "description": "Suspicious",
            "price_per_night": price,
        })


def test_list_properties_for_host(db_session, listing, host, guest):
    assert [p.id for p in records.list_properties_for_host(db_session, host.id)] == [listing.id]
    assert records.list_properties_for_host(db_session, guest.id) == []


def test_delete_property_with_bookings_is_restricted(db_session, listing, booking):
    with pytest.raises(ReferentialIntegrityViolation):
        records.delete_property(db_session, listing.id)
    assert db_session.get(Property, listing.id) is not None
    assert db_session.query(Booking).count() == 1


def test_delete_property_cascades_reviews(db_session, listing, guest):
    records.create_review(db_session, {"property_id": listing.id, "user_id": guest.id, "rating": 4, "comment": "Nice"})
    records.delete_property(db_session, listing.id)
    assert db_session.query(Property).count() == 0
    assert db_session.query(Review).count() == 0


def test_delete_missing_property(db_session):
    with pytest.raises(RecordNotFound):
        records.delete_property(db_session, "missing")


def test_delete_host_with_properties_is_restricted(db_session, listing, host):
    with pytest.raises(ReferentialIntegrityViolation):
        records.delete_user(db_session, host.id)
    assert db_session.get(User, host.id) is not None


def test_delete_user_removes_their_messages(db_session, host, guest):
    records.send_message(db_session, {"sender_id": guest.id, "recipient_id": host.id, "message_body": "Hi"})
    records.delete_user(db_session, guest.id)
    assert db_session.query(Message).count() == 0
    assert db_session.query(User).count() == 1


# ---------- BOOKINGS ----------

def test_create_booking_quotes_total(db_session, booking):
    assert booking.nights == 4
    assert booking.total_price == Decimal("480.00")
    assert booking.status == BookingStatus.PENDING


def test_create_booking_keeps_explicit_total(db_session, listing, guest):
    booking = records.create_booking(db_session, {
        "property_id": listing.id,
        "user_id": guest.id,
        "start_date": "2025-10-10",
        "end_date": "2025-10-12",
        "total_price": "200.00",
        "status": "confirmed",
    })
    assert booking.total_price == Decimal("200.00")
    assert booking.status == "confirmed"


@pytest.mark.parametrize("field", ["property_id", "user_id"])
def test_create_booking_requires_existing_parents(db_session, listing, guest, field):
    data = {
        "property_id": listing.id,
        "user_id": guest.id,
        "start_date": "2025-10-10",
        "end_date": "2025-10-12",
    }
    data[field] = "99999999-9999-9999-9999-999999999999"
    with pytest.raises(ReferentialIntegrityViolation):
        records.create_booking(db_session, data)
    assert db_session.query(Booking).count() == 0


def test_create_booking_rejects_inverted_dates(db_session, listing, guest):
    with pytest.raises(DomainCheckViolation):
        records.create_booking(db_session, {
            "property_id": listing.id,
            "user_id": guest.id,
            "start_date": "2025-10-12",
            "end_date": "2025-10-12",
        })


def test_create_booking_rejects_unknown_status(db_session, listing, guest):
    with pytest.raises(DomainCheckViolation):
        records.create_booking(db_session, {
            "property_id": listing.id,
            "user_id": guest.id,
            "start_date": "2025-10-10",
            "end_date": "2025-10-12",
            "status": "on_hold",
        })


def test_list_bookings_for_property_is_ordered(db_session, listing, guest):
    later = records.create_booking(db_session, {
        "property_id": listing.id, "user_id": guest.id, "start_date": "2025-12-01", "end_date": "2025-12-03",
    })
    earlier = records.create_booking(db_session, {
        "property_id": listing.id, "user_id": guest.id, "start_date": "2025-11-01", "end_date": "2025-11-03",
    })
    assert [b.id for b in records.list_bookings_for_property(db_session, listing.id)] == [earlier.id, later.id]


def test_booking_status_transitions(db_session, booking):
    records.update_booking_status(db_session, booking.id, BookingStatus.CONFIRMED)
    records.update_booking_status(db_session, booking.id, "completed")
    assert db_session.get(Booking, booking.id).status == "completed"
    with pytest.raises(DomainCheckViolation):
        records.update_booking_status(db_session, booking.id, "canceled")


def test_booking_status_rejects_unknown_value(db_session, booking):
    with pytest.raises(DomainCheckViolation):
        records.update_booking_status(db_session, booking.id, "archived")


def test_pending_booking_cannot_complete(db_session, booking):
    with pytest.raises(DomainCheckViolation):
        records.update_booking_status(db_session, booking.id, "completed")
    assert db_session.get(Booking, booking.id).status == "pending"


def test_update_status_of_missing_booking(db_session):
    with pytest.raises(RecordNotFound):
        records.update_booking_status(db_session, "missing", "confirmed")


def test_complete_past_bookings(db_session, booking, listing, guest):
    records.update_booking_status(db_session, booking.id, "confirmed")
    upcoming = records.create_booking(db_session, {
        "property_id": listing.id, "user_id": guest.id,
        "start_date": "2025-12-01", "end_date": "2025-12-03", "status": "confirmed",
    })
    assert records.complete_past_bookings(db_session, today=date(2025, 10, 1)) == 1
    assert db_session.get(Booking, booking.id).status == "completed"
    assert db_session.get(Booking, upcoming.id).status == "confirmed"


# ---------- PAYMENTS ----------

def test_record_payment(db_session, booking, card):
    payment = records.record_payment(db_session, {
        "booking_id": booking.id, "payment_method_id": card.id, "amount": "480.00", "transaction_id": "txn-1",
    })
    assert payment.status == "completed"
    assert payment.payment_date is not None
    assert db_session.get(Booking, booking.id).payment.id == payment.id
    assert card.payments[0].id == payment.id


def test_record_payment_amount_must_match_total(db_session, booking, card):
    with pytest.raises(DomainCheckViolation):
        records.record_payment(db_session, {"booking_id": booking.id, "payment_method_id": card.id, "amount": "100.00"})


def test_record_payment_once_per_booking(db_session, booking, card):
    records.record_payment(db_session, {"booking_id": booking.id, "payment_method_id": card.id, "amount": "480.00"})
    with pytest.raises(UniquenessViolation):
        records.record_payment(db_session, {"booking_id": booking.id, "payment_method_id": card.id, "amount": "480.00"})


def test_record_payment_for_missing_booking(db_session, card):
    with pytest.raises(ReferentialIntegrityViolation):
        records.record_payment(db_session, {"booking_id": "missing", "payment_method_id": card.id, "amount": "1.00"})


def test_record_payment_for_canceled_booking(db_session, booking, card):
    records.update_booking_status(db_session, booking.id, "canceled")
    with pytest.raises(DomainCheckViolation):
        records.record_payment(db_session, {"booking_id": booking.id, "payment_method_id": card.id, "amount": "480.00"})


def test_record_payment_with_someone_elses_method(db_session, booking, host):
    hosts_card = records.add_payment_method(db_session, {"user_id": host.id, "method_type": "paypal"})
    with pytest.raises(DomainCheckViolation):
        records.record_payment(db_session, {
            "booking_id": booking.id, "payment_method_id": hosts_card.id, "amount": "480.00",
        })


def test_payment_method_type_is_closed(db_session, guest):
    with pytest.raises(DomainCheckViolation):
        records.add_payment_method(db_session, {"user_id": guest.id, "method_type": "bitcoin"})


# ---------- REVIEWS & MESSAGES ----------

@pytest.mark.parametrize("rating", [0, 6])
def test_review_rating_out_of_range(db_session, listing, guest, rating):
    with pytest.raises(DomainCheckViolation):
        records.create_review(db_session, {
            "property_id": listing.id, "user_id": guest.id, "rating": rating, "comment": "Meh",
        })
    assert db_session.query(Review).count() == 0


def test_review_linked_to_booking(db_session, booking, listing, guest):
    review = records.create_review(db_session, {
        "property_id": listing.id, "user_id": guest.id, "booking_id": booking.id, "rating": 5, "comment": "Great",
    })
    assert review.booking.id == booking.id
    assert listing.reviews[0].id == review.id


def test_review_booking_must_match(db_session, booking, listing, host):
    with pytest.raises(DomainCheckViolation):
        records.create_review(db_session, {
            "property_id": listing.id, "user_id": host.id, "booking_id": booking.id, "rating": 5, "comment": "Mine",
        })


def test_send_and_read_message(db_session, host, guest, booking):
    message = records.send_message(db_session, {
        "sender_id": guest.id, "recipient_id": host.id, "booking_id": booking.id,
        "subject": "Check-in", "message_body": "What time is check-in?",
    })
    assert message.is_read is False
    assert message.sent_at is not None
    assert records.mark_message_read(db_session, message.id).is_read is True
    assert host.received_messages[0].id == message.id
    assert guest.sent_messages[0].id == message.id


def test_message_to_self_rejected_at_boundary(db_session, guest):
    with pytest.raises(DomainCheckViolation):
        records.send_message(db_session, {"sender_id": guest.id, "recipient_id": guest.id, "message_body": "Hi"})


def test_message_to_missing_user(db_session, guest):
    with pytest.raises(ReferentialIntegrityViolation):
        records.send_message(db_session, {"sender_id": guest.id, "recipient_id": "missing", "message_body": "Hi"})


def test_table_counts(db_session, booking):
    counts = records.table_counts(db_session)
    assert counts["users"] == 2
    assert counts["properties"] == 1
    assert counts["bookings"] == 1
    assert counts["payments"] == 0
    assert list(counts)[0] in {"users", "locations", "property_types", "amenities"}


# ---------- TRANSACTIONS ----------

def test_failed_flush_leaves_session_usable(db_session, listing, guest):
    # SQLite's Date type only binds date objects
    db_session.add(Booking(
        property_id=listing.id, user_id=guest.id,
        start_date="2025-09-01", end_date="2025-09-03", total_price=Decimal("240.00"),
    ))
    with pytest.raises(StatementError):
        records.commit_or_raise(db_session)

    location = records.create_location(db_session, {"city": "Shelbyville", "country": "USA"})
    assert location.id
    assert db_session.query(Booking).count() == 0


def test_create_property_is_undone_when_amenity_link_fails(db_session, host, location, cottage_type):
    sauna = Amenity(amenity_name="sauna")
    db_session.add(sauna)
    db_session.flush()
    # the row goes away while the session still holds the cached object
    db_session.execute(text("DELETE FROM amenities WHERE id = :id"), {"id": sauna.id})

    with pytest.raises(ReferentialIntegrityViolation):
        records.create_property(db_session, {
            "owner_id": host.id,
            "location_id": location.id,
            "property_type_id": cottage_type.id,
            "name": "Spa Cabin",
            "description": "Sauna included",
            "price_per_night": "90.00",
            "amenity_ids": [sauna.id],
        })
    assert db_session.query(Property).count() == 0


def test_zero_total_booking_can_be_paid(db_session, listing, guest, card):
    booking = records.create_booking(db_session, {
        "property_id": listing.id, "user_id": guest.id,
        "start_date": "2025-11-01", "end_date": "2025-11-02", "total_price": "0.00",
    })
    payment = records.record_payment(db_session, {
        "booking_id": booking.id, "payment_method_id": card.id, "amount": "0.00",
    })
    assert payment.amount == Decimal("0.00")
