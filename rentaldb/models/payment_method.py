from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from enum import Enum
from sqlalchemy import String, ForeignKey, Boolean, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id, one_of

if TYPE_CHECKING:
    from .user import User
    from .payment import Payment

class PaymentMethodType(str, Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"

class PaymentMethod(Base):
    __tablename__ = "payment_methods"
    __table_args__ = (
        CheckConstraint(one_of("method_type", PaymentMethodType), name="method_type"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    method_type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    added_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    user: Mapped[User] = relationship(back_populates="payment_methods")
    payments: Mapped[list[Payment]] = relationship(back_populates="payment_method", passive_deletes="all")
