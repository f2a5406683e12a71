from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import String, Text, Table, Column, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id

if TYPE_CHECKING:
    from .property import Property

# Junction for the Property <-> Amenity many-to-many; the composite key keeps pairs unique
property_amenities = Table(
    "property_amenities",
    Base.metadata,
    Column("property_id", ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
    Column("amenity_id", ForeignKey("amenities.id", ondelete="CASCADE"), primary_key=True, index=True),
)

class Amenity(Base):
    __tablename__ = "amenities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    amenity_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    properties: Mapped[list[Property]] = relationship(
        secondary=property_amenities, back_populates="amenities", passive_deletes=True
    )
