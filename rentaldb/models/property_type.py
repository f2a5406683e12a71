from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, new_id

if TYPE_CHECKING:
    from .property import Property

class PropertyType(Base):
    __tablename__ = "property_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    type_name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    properties: Mapped[list[Property]] = relationship(back_populates="property_type", passive_deletes="all")
