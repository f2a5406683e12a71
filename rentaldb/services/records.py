"""Validated insert/update/delete paths for every table.

Each public function is one transaction: it either commits the whole change
or rolls back and raises. Constraint failures surface as a
``ConstraintViolation``; any other database error propagates unchanged.
"""
import logging
from contextlib import contextmanager
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import Base
from ..errors import (
    DomainCheckViolation,
    RecordNotFound,
    ReferentialIntegrityViolation,
    from_integrity_error,
    from_validation_error,
)
from ..models import (
    Amenity,
    Booking,
    BookingStatus,
    Location,
    Message,
    Payment,
    PaymentMethod,
    Property,
    PropertyType,
    Review,
    User,
)
from ..schemas import (
    AmenityCreate,
    BookingCreate,
    LocationCreate,
    MessageCreate,
    PaymentCreate,
    PaymentMethodCreate,
    PropertyCreate,
    PropertyTypeCreate,
    ReviewCreate,
    UserCreate,
)
from ..security import hash_password, verify_password

logger = logging.getLogger(__name__)

# Terminal states have no outgoing transitions
BOOKING_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELED},
    BookingStatus.CANCELED: set(),
    BookingStatus.COMPLETED: set(),
}


def _validate(schema_cls: type[BaseModel], data: Any, table: str):
    if isinstance(data, schema_cls):
        return data
    try:
        return schema_cls.model_validate(data)
    except ValidationError as exc:
        violation = from_validation_error(exc, table=table)
        logger.warning("Rejected %s write: %s", table, violation.detail)
        raise violation from exc


def _fields(payload: BaseModel, exclude: set[str] | None = None) -> dict:
    values = payload.model_dump(exclude=exclude or set(), mode="python")
    if values.get("id") is None:
        values.pop("id", None)
    # enum members are stored by value in plain string columns
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in values.items()}


@contextmanager
def atomic(db: Session):
    """Run a block of writes as one transaction, translating engine constraint failures."""
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        violation = from_integrity_error(exc)
        logger.warning("Rejected write on %s: %s", violation.table or "<unknown>", violation.detail)
        raise violation from exc
    except Exception:
        db.rollback()
        raise


def commit_or_raise(db: Session) -> None:
    """Commit pending changes in the session, translating engine constraint failures."""
    with atomic(db):
        pass


def _add(db: Session, obj):
    db.add(obj)
    commit_or_raise(db)
    db.refresh(obj)
    logger.debug("Inserted %s %s", obj.__tablename__, obj.id)
    return obj


def _get_or_raise(db: Session, model, record_id: str):
    obj = db.get(model, record_id)
    if obj is None:
        raise RecordNotFound(model.__tablename__, record_id)
    return obj


# ==== Lookup tables ====

def create_location(db: Session, data: LocationCreate | dict) -> Location:
    payload = _validate(LocationCreate, data, "locations")
    return _add(db, Location(**_fields(payload)))


def create_property_type(db: Session, data: PropertyTypeCreate | dict) -> PropertyType:
    payload = _validate(PropertyTypeCreate, data, "property_types")
    return _add(db, PropertyType(**_fields(payload)))


def create_amenity(db: Session, data: AmenityCreate | dict) -> Amenity:
    payload = _validate(AmenityCreate, data, "amenities")
    return _add(db, Amenity(**_fields(payload)))


# ==== Users ====

def create_user(db: Session, data: UserCreate | dict) -> User:
    payload = _validate(UserCreate, data, "users")
    fields = _fields(payload, exclude={"password"})
    user = User(password_hash=hash_password(payload.password), **fields)
    return _add(db, user)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email)).first()


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def delete_user(db: Session, user_id: str) -> None:
    """Delete a user; owned properties and bookings block the delete."""
    user = _get_or_raise(db, User, user_id)
    db.delete(user)
    commit_or_raise(db)
    logger.info("Deleted user %s", user_id)


# ==== Properties ====

def create_property(db: Session, data: PropertyCreate | dict) -> Property:
    payload = _validate(PropertyCreate, data, "properties")
    amenities = []
    for amenity_id in payload.amenity_ids:
        amenity = db.get(Amenity, amenity_id)
        if amenity is None:
            raise ReferentialIntegrityViolation(f"amenity {amenity_id} does not exist", table="property_amenities")
        amenities.append(amenity)
    prop = Property(**_fields(payload, exclude={"amenity_ids"}))
    prop.amenities = amenities
    return _add(db, prop)


def list_properties_for_host(db: Session, owner_id: str) -> list[Property]:
    return list(db.scalars(select(Property).where(Property.owner_id == owner_id).order_by(Property.name.asc())))


def delete_property(db: Session, property_id: str) -> None:
    """Delete a property and its reviews; existing bookings block the delete."""
    prop = _get_or_raise(db, Property, property_id)
    db.delete(prop)
    commit_or_raise(db)
    logger.info("Deleted property %s", property_id)


# ==== Bookings ====

def quote_total(prop: Property, start_date: date, end_date: date):
    return prop.price_per_night * (end_date - start_date).days


def create_booking(db: Session, data: BookingCreate | dict) -> Booking:
    payload = _validate(BookingCreate, data, "bookings")
    fields = _fields(payload)
    if payload.total_price is None:
        prop = db.get(Property, payload.property_id)
        if prop is None:
            raise ReferentialIntegrityViolation(f"property {payload.property_id} does not exist", table="bookings")
        fields["total_price"] = quote_total(prop, payload.start_date, payload.end_date)
    return _add(db, Booking(**fields))


def list_bookings_for_property(db: Session, property_id: str) -> list[Booking]:
    return list(
        db.scalars(select(Booking).where(Booking.property_id == property_id).order_by(Booking.start_date.asc()))
    )


def update_booking_status(db: Session, booking_id: str, status: BookingStatus | str) -> Booking:
    try:
        target = BookingStatus(status)
    except ValueError:
        raise DomainCheckViolation(f"unknown booking status {status!r}", table="bookings") from None
    booking = _get_or_raise(db, Booking, booking_id)
    current = BookingStatus(booking.status)
    if target not in BOOKING_TRANSITIONS[current]:
        raise DomainCheckViolation(
            f"booking {booking_id} cannot move from {current.value} to {target.value}", table="bookings"
        )
    booking.status = target.value
    commit_or_raise(db)
    logger.info("Booking %s %s -> %s", booking_id, current.value, target.value)
    return booking


def complete_past_bookings(db: Session, today: date | None = None) -> int:
    """
    Mark confirmed bookings whose end_date is in the past as completed.
    Returns the number of rows affected.
    """
    today = today or date.today()
    q = db.query(Booking).filter(
        Booking.end_date < today,
        Booking.status == BookingStatus.CONFIRMED.value,
    )
    result = q.update({Booking.status: BookingStatus.COMPLETED.value}, synchronize_session=False)
    commit_or_raise(db)
    logger.info("Completed %d past bookings", result)
    return int(result)


# ==== Payments ====

def add_payment_method(db: Session, data: PaymentMethodCreate | dict) -> PaymentMethod:
    payload = _validate(PaymentMethodCreate, data, "payment_methods")
    return _add(db, PaymentMethod(**_fields(payload)))


def record_payment(db: Session, data: PaymentCreate | dict) -> Payment:
    payload = _validate(PaymentCreate, data, "payments")
    booking = db.get(Booking, payload.booking_id)
    if booking is None:
        raise ReferentialIntegrityViolation(f"booking {payload.booking_id} does not exist", table="payments")
    if booking.status == BookingStatus.CANCELED.value:
        raise DomainCheckViolation(f"booking {booking.id} is canceled", table="payments")
    if payload.amount != booking.total_price:
        raise DomainCheckViolation(
            f"payment amount {payload.amount} does not match booking total {booking.total_price}",
            table="payments",
        )
    method = db.get(PaymentMethod, payload.payment_method_id)
    if method is not None and method.user_id != booking.user_id:
        raise DomainCheckViolation(
            f"payment method {method.id} does not belong to the booking guest", table="payments"
        )
    return _add(db, Payment(**_fields(payload)))


# ==== Reviews & messages ====

def create_review(db: Session, data: ReviewCreate | dict) -> Review:
    payload = _validate(ReviewCreate, data, "reviews")
    if payload.booking_id is not None:
        booking = db.get(Booking, payload.booking_id)
        if booking is not None and (
            booking.property_id != payload.property_id or booking.user_id != payload.user_id
        ):
            raise DomainCheckViolation(
                f"booking {booking.id} is not a stay by this reviewer at this property", table="reviews"
            )
    return _add(db, Review(**_fields(payload)))


def send_message(db: Session, data: MessageCreate | dict) -> Message:
    payload = _validate(MessageCreate, data, "messages")
    return _add(db, Message(**_fields(payload)))


def mark_message_read(db: Session, message_id: str) -> Message:
    message = _get_or_raise(db, Message, message_id)
    if not message.is_read:
        message.is_read = True
        commit_or_raise(db)
    return message


# ==== Inspection ====

def table_counts(db: Session) -> dict[str, int]:
    """Row count of every table, in dependency order."""
    return {
        table.name: db.execute(select(func.count()).select_from(table)).scalar_one()
        for table in Base.metadata.sorted_tables
    }
