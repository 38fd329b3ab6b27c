"""
Booking notification and invoicing hooks.

Delivery (email, push) and invoicing belong to other services. These hooks
record what should be sent as structured log events so a downstream
consumer can pick them up; routes schedule them as background tasks after
the booking transaction has committed.
"""

from typing import Any

import structlog

logger = structlog.get_logger(__name__)


def _parties(booking: dict[str, Any]) -> dict[str, Any]:
    return {
        "booking_id": booking.get("id"),
        "property_id": booking.get("property_id"),
        "guest_id": booking.get("guest_id"),
    }


def notify_booking_requested(booking: dict[str, Any]) -> None:
    """Tell the guest and the property owner that a booking is pending."""
    logger.info(
        "notification_booking_requested",
        check_in=str(booking.get("check_in")),
        check_out=str(booking.get("check_out")),
        total_price=str(booking.get("total_price")),
        **_parties(booking),
    )


def notify_booking_confirmed(booking: dict[str, Any]) -> None:
    """Tell both parties the booking is confirmed and request an invoice."""
    logger.info("notification_booking_confirmed", **_parties(booking))
    logger.info(
        "invoice_issue_requested",
        amount=str(booking.get("total_price")),
        **_parties(booking),
    )


def notify_booking_cancelled(booking: dict[str, Any]) -> None:
    """Tell both parties the booking is cancelled and void any invoice."""
    logger.info(
        "notification_booking_cancelled",
        reason=booking.get("cancellation_reason"),
        **_parties(booking),
    )
    logger.info("invoice_cancel_requested", **_parties(booking))


def mark_invoice_paid(booking: dict[str, Any]) -> None:
    """Request that the booking's invoice be marked as paid."""
    logger.info("invoice_paid_requested", **_parties(booking))
