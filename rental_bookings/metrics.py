"""
Prometheus metrics for booking admission, lifecycle and database access.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from rental_bookings.metrics import booking_evaluations
    >>> booking_evaluations.labels(outcome="capacity_exceeded").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Admission Metrics
# =============================================================================

booking_evaluations = Counter(
    "rentals_booking_evaluations_total",
    "Booking admission evaluations by outcome",
    ["outcome"],
)
"""
Counter for evaluator runs.

Labels:
    outcome: "accepted" or the violated rule (e.g. "date_range_conflict")
"""

bookings_created = Counter(
    "rentals_bookings_created_total",
    "Bookings persisted in pending state",
)

booking_quotes = Counter(
    "rentals_booking_quotes_total",
    "Price quotes served without persisting a booking",
)

storage_conflicts = Counter(
    "rentals_booking_storage_conflicts_total",
    "Inserts rejected by the overlap exclusion constraint",
)
"""Non-zero values mean two requests raced past the row lock (or a writer bypassed it)."""

# =============================================================================
# Lifecycle Metrics
# =============================================================================

status_transitions = Counter(
    "rentals_booking_status_transitions_total",
    "Booking status transitions applied",
    ["from_status", "to_status"],
)

# =============================================================================
# Database Metrics
# =============================================================================

db_query_duration = Histogram(
    "rentals_db_query_duration_seconds",
    "Database operation time in seconds",
    ["operation"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, float("inf")),
)
"""
Histogram for database operations.

Labels:
    operation: e.g. "lock_property", "load_active_bookings", "insert_booking"
"""
