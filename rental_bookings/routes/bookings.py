"""Booking routes: create, quote, read, list, update and delete."""

from typing import Any, NoReturn, Optional

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from rental_bookings.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from rental_bookings.dependencies import get_db_engine
from rental_bookings.schemas.bookings import (
    BookingCreatePayload,
    BookingOut,
    BookingStatus,
    BookingUpdatePayload,
    QuoteOut,
    StayRequest,
)
from rental_bookings.services.bookings import (
    InvalidStatusTransitionError,
    NotFoundError,
    create_booking,
    fetch_booking,
    quote_booking,
    remove_booking,
    search_bookings,
    update_booking,
)
from rental_bookings.services.evaluator import RuleViolation
from rental_bookings.services.notifications import notify_booking_requested

logger = structlog.get_logger(__name__)
router = APIRouter()


def raise_rule_violation(violation: RuleViolation) -> NoReturn:
    """Translate an admission rule violation into a 422 response."""
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"rule": violation.rule.value, "message": violation.message},
    )


def raise_not_found(error: NotFoundError) -> NoReturn:
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))


@router.post("/bookings", status_code=status.HTTP_201_CREATED, response_model=BookingOut)
def create_booking_endpoint(
    payload: BookingCreatePayload,
    background_tasks: BackgroundTasks,
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Book a stay. The booking is created in pending state with its price
    breakdown frozen at the property's current rates.

    Args:
        payload: Property, guest, dates and guest count
        background_tasks: FastAPI background task runner (notifications)
        engine: Database engine

    Returns:
        BookingOut: The persisted booking
    """
    try:
        result = create_booking(
            engine,
            property_id=payload.property_id,
            guest_id=payload.guest_id,
            check_in=payload.check_in,
            check_out=payload.check_out,
            guests_count=payload.guests_count,
            special_requests=payload.special_requests,
        )
        if isinstance(result, RuleViolation):
            raise_rule_violation(result)

        background_tasks.add_task(notify_booking_requested, result)
        return result

    except HTTPException:
        raise
    except NotFoundError as e:
        raise_not_found(e)
    except Exception as e:
        logger.exception("booking_creation_failed", property_id=payload.property_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/bookings/quote", status_code=status.HTTP_200_OK, response_model=QuoteOut)
def quote_booking_endpoint(
    payload: StayRequest,
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Price a stay without booking it. Runs the same admission rules as
    POST /bookings and returns the same 422 on a violation.
    """
    try:
        result = quote_booking(
            engine,
            property_id=payload.property_id,
            check_in=payload.check_in,
            check_out=payload.check_out,
            guests_count=payload.guests_count,
        )
        if isinstance(result, RuleViolation):
            raise_rule_violation(result)
        return result

    except HTTPException:
        raise
    except NotFoundError as e:
        raise_not_found(e)
    except Exception as e:
        logger.exception("booking_quote_failed", property_id=payload.property_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/bookings", response_model=list[BookingOut])
def list_bookings_endpoint(
    property_id: Optional[int] = Query(None, description="Filter by property"),
    guest_id: Optional[int] = Query(None, description="Filter by guest"),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """List bookings, newest first."""
    try:
        return search_bookings(
            engine,
            property_id=property_id,
            guest_id=guest_id,
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    except Exception as e:
        logger.exception("booking_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/bookings/{booking_id}", response_model=BookingOut)
def get_booking_endpoint(booking_id: int, engine: Engine = Depends(get_db_engine)) -> Any:
    try:
        return fetch_booking(engine, booking_id)
    except NotFoundError as e:
        raise_not_found(e)
    except Exception as e:
        logger.exception("booking_read_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/bookings/{booking_id}", response_model=BookingOut)
def update_booking_endpoint(
    booking_id: int,
    payload: BookingUpdatePayload,
    background_tasks: BackgroundTasks,
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Update a booking's status, payment status or notes.

    Returns 409 when the requested status cannot be reached from the
    current one (e.g. anything out of cancelled, completed or rejected).
    """
    try:
        result = update_booking(engine, booking_id, **payload.model_dump())
    except NotFoundError as e:
        raise_not_found(e)
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.exception("booking_update_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    for task in result.follow_ups:
        background_tasks.add_task(task, result.booking)
    return result.booking


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_200_OK)
def delete_booking_endpoint(
    booking_id: int, engine: Engine = Depends(get_db_engine)
) -> dict[str, str]:
    try:
        remove_booking(engine, booking_id)
    except NotFoundError as e:
        raise_not_found(e)
    except Exception as e:
        logger.exception("booking_deletion_failed", booking_id=booking_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"message": f"Booking {booking_id} deleted"}
