"""SQLAlchemy model for guest bookings."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import ExcludeConstraint
from sqlalchemy.sql import func

from rental_bookings.config import SCHEMA
from rental_bookings.models.base import Base

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed", "rejected")
PAYMENT_STATUSES = ("pending", "paid", "refunded", "failed")

# Statuses that still occupy their date range on the property calendar.
ACTIVE_STATUSES = ("pending", "confirmed", "completed")

OVERLAP_CONSTRAINT_NAME = "ex_bookings_active_no_overlap"


class Booking(Base):
    """
    ORM model for a booking of one property by one guest.

    Pricing columns are snapshots taken when the booking is admitted and
    never recomputed, even if the property's rates change later.

    Active bookings (pending, confirmed, completed) of the same property may
    not overlap on [check_in, check_out); the exclusion constraint below
    enforces this at the storage layer (requires the btree_gist extension).
    """

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(
        Integer,
        ForeignKey(f"{SCHEMA}.properties.id", ondelete="CASCADE"),
        nullable=False,
    )
    guest_id = Column(Integer, nullable=False, index=True)
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    guests_count = Column(Integer, nullable=False)
    nights = Column(Integer, nullable=False)
    price_per_night = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    cleaning_fee = Column(Numeric(10, 2), nullable=False, server_default="0")
    service_fee = Column(Numeric(10, 2), nullable=False, server_default="0")
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(*BOOKING_STATUSES, name="booking_status", schema=SCHEMA),
        nullable=False,
        server_default="pending",
        index=True,
    )
    payment_status = Column(
        Enum(*PAYMENT_STATUSES, name="payment_status", schema=SCHEMA),
        nullable=False,
        server_default="pending",
    )
    special_requests = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("check_out > check_in", name="ck_bookings_check_out_after_check_in"),
        CheckConstraint("guests_count >= 1", name="ck_bookings_guests_count_positive"),
        Index("ix_bookings_property_dates", "property_id", "check_in", "check_out"),
        ExcludeConstraint(
            (property_id, "="),
            (func.daterange(check_in, check_out), "&&"),
            name=OVERLAP_CONSTRAINT_NAME,
            using="gist",
            where=text("status IN ('pending', 'confirmed', 'completed')"),
        ),
        {"schema": SCHEMA},
    )
