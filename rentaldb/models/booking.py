from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from enum import Enum as PyEnum
from sqlalchemy import String, ForeignKey, Date, Numeric, DateTime, CheckConstraint, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id, one_of

if TYPE_CHECKING:
    from .property import Property
    from .user import User
    from .payment import Payment
    from .review import Review
    from .message import Message

class BookingStatus(str, PyEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    COMPLETED = "completed"

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="date_order"),
        CheckConstraint("total_price >= 0", name="total_price_non_negative"),
        CheckConstraint(one_of("status", BookingStatus), name="status"),
        # composite index helps availability searches
        Index("ix_bookings_property_start_end", "property_id", "start_date", "end_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    property_id: Mapped[str] = mapped_column(ForeignKey("properties.id", ondelete="RESTRICT"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=BookingStatus.PENDING.value, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    # Relationships
    property: Mapped[Property] = relationship(back_populates="bookings")
    user: Mapped[User] = relationship(back_populates="bookings")
    payment: Mapped[Optional[Payment]] = relationship(back_populates="booking", passive_deletes="all")
    reviews: Mapped[list[Review]] = relationship(back_populates="booking", passive_deletes=True)
    messages: Mapped[list[Message]] = relationship(back_populates="booking", passive_deletes=True)
