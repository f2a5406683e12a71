from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlalchemy import String, Text, ForeignKey, Numeric, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id
from .amenity import property_amenities

if TYPE_CHECKING:
    from .user import User
    from .location import Location
    from .property_type import PropertyType
    from .amenity import Amenity
    from .booking import Booking
    from .review import Review

class Property(Base):
    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price_per_night > 0", name="price_positive"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    location_id: Mapped[str] = mapped_column(ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False, index=True)
    property_type_id: Mapped[str] = mapped_column(
        ForeignKey("property_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    owner: Mapped[User] = relationship(back_populates="properties")
    location: Mapped[Location] = relationship(back_populates="properties")
    property_type: Mapped[PropertyType] = relationship(back_populates="properties")

    amenities: Mapped[list[Amenity]] = relationship(
        secondary=property_amenities, back_populates="properties", passive_deletes=True
    )

    # Bookings pin the property in place (RESTRICT); reviews go with it
    bookings: Mapped[list[Booking]] = relationship(back_populates="property", passive_deletes="all")
    reviews: Mapped[list[Review]] = relationship(
        back_populates="property", cascade="all, delete-orphan", passive_deletes=True
    )
