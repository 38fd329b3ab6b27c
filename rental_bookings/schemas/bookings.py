from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

BookingStatus = Literal["pending", "confirmed", "cancelled", "completed", "rejected"]
PaymentStatus = Literal["pending", "paid", "refunded", "failed"]


class StayRequest(BaseModel):
    """
    Schema for the stay being asked about: property, dates and party size.
    """

    property_id: int = Field(..., description="Property to book")
    check_in: date = Field(..., description="Arrival date (first night)")
    check_out: date = Field(..., description="Departure date, strictly after check_in")
    guests_count: int = Field(..., ge=1, description="Number of guests")

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "StayRequest":
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class BookingCreatePayload(StayRequest):
    """
    Schema for creating a booking. There is no auth layer in this service,
    so the caller identifies the guest.
    """

    guest_id: int = Field(..., description="Guest making the booking")
    special_requests: Optional[str] = Field(None, description="Free-text note for the host")


class BookingUpdatePayload(BaseModel):
    """
    Schema for updating a booking. All fields are optional.
    Note: pricing and dates are fixed once a booking exists.
    """

    status: Optional[BookingStatus] = Field(None, description="New lifecycle status")
    payment_status: Optional[PaymentStatus] = Field(None, description="New payment status")
    special_requests: Optional[str] = Field(None, description="Free-text note for the host")
    cancellation_reason: Optional[str] = Field(
        None, description="Stored when the booking moves to cancelled"
    )


class QuoteOut(BaseModel):
    """Price breakdown for an admissible stay."""

    model_config = ConfigDict(from_attributes=True)

    check_in: date
    check_out: date
    guests_count: int
    nights: int
    price_per_night: Decimal
    subtotal: Decimal
    cleaning_fee: Decimal
    service_fee: Decimal
    total_price: Decimal


class BookingOut(BaseModel):
    id: int
    property_id: int
    guest_id: int
    check_in: date
    check_out: date
    guests_count: int
    nights: int
    price_per_night: Decimal
    subtotal: Decimal
    cleaning_fee: Decimal
    service_fee: Decimal
    total_price: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    special_requests: Optional[str] = None
    cancellation_reason: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
