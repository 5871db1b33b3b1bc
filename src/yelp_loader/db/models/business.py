"""
SQLAlchemy ORM models for the core business tables.

- Business (business): one row per record with its scalar fields
- BusinessHour (business_hour): one row per opening-hours window

business_hour rows are inserted before their business row, so no foreign key
is declared between the two tables.
"""

from sqlalchemy import Boolean, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from yelp_loader.db.models.base import Base
from yelp_loader.schema.ddl import IDENTIFIER_LENGTH


class Business(Base):
    """
    Business table (business).

    Corresponds to the scalar fields of the BusinessRecord pydantic model.
    """

    __tablename__ = "business"

    business_id: Mapped[str] = mapped_column(String(IDENTIFIER_LENGTH), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255))
    full_address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(10))
    latitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    longitude: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    stars: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Business(business_id={self.business_id!r}, name={self.name!r})>"


class BusinessHour(Base):
    """
    Opening hours table (business_hour).

    Corresponds to the OpeningHours pydantic model.
    """

    __tablename__ = "business_hour"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    business_id: Mapped[str] = mapped_column(String(IDENTIFIER_LENGTH), nullable=False)
    day: Mapped[str] = mapped_column(String(10), nullable=False)
    close: Mapped[str] = mapped_column(String(5), nullable=False)
    open: Mapped[str] = mapped_column(String(5), nullable=False)

    __table_args__ = (Index("ix_business_hour_business_id", "business_id"),)

    def __repr__(self) -> str:
        return f"<BusinessHour(business_id={self.business_id!r}, day={self.day!r})>"
