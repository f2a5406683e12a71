from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id

if TYPE_CHECKING:
    from .property import Property

class Location(Base):
    __tablename__ = "locations"
    __table_args__ = (
        UniqueConstraint("city", "state", "country", "postal_code"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str | None] = mapped_column(String(20))

    properties: Mapped[list[Property]] = relationship(back_populates="location", passive_deletes="all")
