"""
Booking admission and pricing.

evaluate() decides whether a stay request may be booked on a property and,
if so, prices it. It is a pure function: callers load the property and the
property's active bookings, pass them in, and persist the returned draft.

Rules run in a fixed order and the first failing rule is returned, so a
client always sees a single, stable reason for a rejection.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from rental_bookings.utils.datetime import nights_between

LONG_TERM_THRESHOLD_NIGHTS = 28
SERVICE_FEE_RATE = Decimal("0.12")

CENT = Decimal("0.01")


class RentalType(str, Enum):
    short_term = "short_term"
    long_term = "long_term"
    both = "both"


class Rule(str, Enum):
    """Admission rules, in evaluation order."""

    capacity_exceeded = "capacity_exceeded"
    outside_availability_window = "outside_availability_window"
    stay_too_short = "stay_too_short"
    stay_too_long = "stay_too_long"
    rental_type_mismatch = "rental_type_mismatch"
    date_range_conflict = "date_range_conflict"


@dataclass(frozen=True)
class PropertyTerms:
    """The booking-relevant terms of a property."""

    max_guests: int
    rental_type: RentalType = RentalType.both
    available_from: Optional[date] = None
    available_to: Optional[date] = None
    minimum_stay_nights: Optional[int] = None
    maximum_stay_nights: Optional[int] = None
    price_per_night: Decimal = Decimal("0")
    cleaning_fee: Decimal = Decimal("0")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> PropertyTerms:
        """Build terms from a properties row; NULL prices count as zero."""
        return cls(
            max_guests=int(row["max_guests"]),
            rental_type=RentalType(row["rental_type"]),
            available_from=row.get("available_from"),
            available_to=row.get("available_to"),
            minimum_stay_nights=row.get("minimum_stay_nights"),
            maximum_stay_nights=row.get("maximum_stay_nights"),
            price_per_night=Decimal(str(row.get("price_per_night") or 0)),
            cleaning_fee=Decimal(str(row.get("cleaning_fee") or 0)),
        )


@dataclass(frozen=True)
class BookedRange:
    """Half-open [check_in, check_out) range held by an existing booking."""

    check_in: date
    check_out: date

    def overlaps(self, check_in: date, check_out: date) -> bool:
        return self.check_in < check_out and self.check_out > check_in


@dataclass(frozen=True)
class BookingDraft:
    """A stay that passed every rule, priced and ready to persist as pending."""

    check_in: date
    check_out: date
    guests_count: int
    nights: int
    price_per_night: Decimal
    subtotal: Decimal
    cleaning_fee: Decimal
    service_fee: Decimal
    total_price: Decimal
    status: str = "pending"
    payment_status: str = "pending"


@dataclass(frozen=True)
class RuleViolation:
    rule: Rule
    message: str


Evaluation = Union[BookingDraft, RuleViolation]


def evaluate(
    terms: PropertyTerms,
    check_in: date,
    check_out: date,
    guests_count: int,
    existing_bookings: Iterable[BookedRange],
) -> Evaluation:
    """
    Run the admission rules for a stay and price it.

    Args:
        terms: Booking terms of the target property
        check_in: First night of the stay
        check_out: Departure date, strictly after check_in
        guests_count: Number of guests (>= 1)
        existing_bookings: Active bookings already held on the property

    Returns:
        BookingDraft if every rule passes, otherwise the first RuleViolation
    """
    if guests_count > terms.max_guests:
        return RuleViolation(Rule.capacity_exceeded, "Too many guests for this property.")

    if terms.available_from and check_in < terms.available_from:
        return RuleViolation(Rule.outside_availability_window, "Property is not available yet.")
    if terms.available_to and check_out > terms.available_to:
        return RuleViolation(
            Rule.outside_availability_window,
            "Property is not available for the entire selected period.",
        )

    nights = nights_between(check_in, check_out)

    # 0 means "no bound", same as NULL
    if terms.minimum_stay_nights and nights < terms.minimum_stay_nights:
        return RuleViolation(
            Rule.stay_too_short, "Stay is shorter than the minimum allowed nights."
        )
    if terms.maximum_stay_nights and nights > terms.maximum_stay_nights:
        return RuleViolation(Rule.stay_too_long, "Stay is longer than the maximum allowed nights.")

    if terms.rental_type == RentalType.short_term and nights >= LONG_TERM_THRESHOLD_NIGHTS:
        return RuleViolation(
            Rule.rental_type_mismatch, "This property only accepts short-term stays."
        )
    if terms.rental_type == RentalType.long_term and nights < LONG_TERM_THRESHOLD_NIGHTS:
        return RuleViolation(
            Rule.rental_type_mismatch, "This property only accepts long-term stays."
        )

    if any(booked.overlaps(check_in, check_out) for booked in existing_bookings):
        return RuleViolation(
            Rule.date_range_conflict, "Selected dates overlap with an existing booking."
        )

    return price_stay(terms, check_in, check_out, guests_count, nights)


def price_stay(
    terms: PropertyTerms, check_in: date, check_out: date, guests_count: int, nights: int
) -> BookingDraft:
    """Compute the price breakdown for an admitted stay."""
    subtotal = terms.price_per_night * nights
    cleaning_fee = terms.cleaning_fee
    service_fee = (subtotal * SERVICE_FEE_RATE).quantize(CENT, rounding=ROUND_HALF_UP)
    return BookingDraft(
        check_in=check_in,
        check_out=check_out,
        guests_count=guests_count,
        nights=nights,
        price_per_night=terms.price_per_night,
        subtotal=subtotal,
        cleaning_fee=cleaning_fee,
        service_fee=service_fee,
        total_price=subtotal + cleaning_fee + service_fee,
    )
