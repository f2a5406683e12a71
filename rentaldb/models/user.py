from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from enum import Enum
from sqlalchemy import String, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id, one_of

if TYPE_CHECKING:
    from .property import Property
    from .booking import Booking
    from .payment_method import PaymentMethod
    from .review import Review
    from .message import Message

class UserRole(str, Enum):
    HOST = "host"
    GUEST = "guest"
    ADMIN = "admin"

class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(one_of("role", UserRole), name="role"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(30))
    role: Mapped[str] = mapped_column(String(20), default=UserRole.GUEST.value, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    # Hosts own properties via properties.owner_id -> users.id (RESTRICT)
    properties: Mapped[list[Property]] = relationship(back_populates="owner", passive_deletes="all")
    bookings: Mapped[list[Booking]] = relationship(back_populates="user", passive_deletes="all")

    payment_methods: Mapped[list[PaymentMethod]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    reviews: Mapped[list[Review]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    sent_messages: Mapped[list[Message]] = relationship(
        back_populates="sender",
        foreign_keys="Message.sender_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    received_messages: Mapped[list[Message]] = relationship(
        back_populates="recipient",
        foreign_keys="Message.recipient_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
