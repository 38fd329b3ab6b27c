"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP rentals_booking_evaluations_total Booking admission evaluations by outcome
        # TYPE rentals_booking_evaluations_total counter
        rentals_booking_evaluations_total{outcome="accepted"} 42.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """
    Expose all registered metrics in Prometheus text exposition format.

    Returns:
        Response: Metrics with Content-Type: text/plain
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
