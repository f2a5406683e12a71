from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Text, Boolean, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id

if TYPE_CHECKING:
    from .user import User
    from .booking import Booking
    from .review import Review

class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="distinct_parties"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    sender_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Optional context; absent means a plain conversation, not a dangling reference
    booking_id: Mapped[str | None] = mapped_column(ForeignKey("bookings.id", ondelete="SET NULL"))
    review_id: Mapped[str | None] = mapped_column(ForeignKey("reviews.id", ondelete="SET NULL"))
    subject: Mapped[str | None] = mapped_column(String(200))
    message_body: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    sender: Mapped[User] = relationship(back_populates="sent_messages", foreign_keys=[sender_id])
    recipient: Mapped[User] = relationship(back_populates="received_messages", foreign_keys=[recipient_id])
    booking: Mapped[Optional[Booking]] = relationship(back_populates="messages")
    review: Mapped[Optional[Review]] = relationship(back_populates="messages")
