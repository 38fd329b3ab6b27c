# rental_bookings/main.py

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rental_bookings.config import ALLOWED_ORIGINS
from rental_bookings.logging_config import setup_logging
from rental_bookings.middleware import RequestIDMiddleware
from rental_bookings.routes.bookings import router as bookings_router
from rental_bookings.routes.health import router as health_router
from rental_bookings.routes.metrics import router as metrics_router

setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Rental Bookings API",
    description="Booking admission, pricing and lifecycle for rental properties",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIDMiddleware)

app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(bookings_router, tags=["Bookings"])
