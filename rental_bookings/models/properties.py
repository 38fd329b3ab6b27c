"""SQLAlchemy model for rentable properties."""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum, Integer, Numeric, String
from sqlalchemy.sql import func

from rental_bookings.config import SCHEMA
from rental_bookings.models.base import Base

RENTAL_TYPES = ("short_term", "long_term", "both")


class Property(Base):
    """
    ORM model for a rentable property.

    Only the columns the booking engine reads are modelled here: capacity,
    availability window, stay-length bounds, rental type and pricing.
    Listing content (descriptions, images, amenities) lives elsewhere.
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("max_guests >= 1", name="ck_properties_max_guests_positive"),
        CheckConstraint("price_per_night >= 0", name="ck_properties_price_non_negative"),
        CheckConstraint("cleaning_fee >= 0", name="ck_properties_cleaning_fee_non_negative"),
        {"schema": SCHEMA},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=True, index=True)
    title = Column(String, nullable=False)
    max_guests = Column(Integer, nullable=False, server_default="2")
    available_from = Column(Date, nullable=True)
    available_to = Column(Date, nullable=True)
    minimum_stay_nights = Column(Integer, nullable=True, server_default="1")
    maximum_stay_nights = Column(Integer, nullable=True)
    rental_type = Column(
        Enum(*RENTAL_TYPES, name="rental_type", schema=SCHEMA),
        nullable=False,
        server_default="both",
    )
    price_per_night = Column(Numeric(10, 2), nullable=True)
    cleaning_fee = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
