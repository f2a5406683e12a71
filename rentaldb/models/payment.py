from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from enum import Enum
from sqlalchemy import String, ForeignKey, Numeric, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id, one_of

if TYPE_CHECKING:
    from .booking import Booking
    from .payment_method import PaymentMethod

class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="amount_non_negative"),
        CheckConstraint(one_of("status", PaymentStatus), name="status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # One payment settles one booking
    booking_id: Mapped[str] = mapped_column(
        ForeignKey("bookings.id", ondelete="RESTRICT"), unique=True, nullable=False, index=True
    )
    payment_method_id: Mapped[str] = mapped_column(
        ForeignKey("payment_methods.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.COMPLETED.value, nullable=False)
    transaction_id: Mapped[str | None] = mapped_column(String(100), unique=True)
    payment_date: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    booking: Mapped[Booking] = relationship(back_populates="payment")
    payment_method: Mapped[PaymentMethod] = relationship(back_populates="payments")
