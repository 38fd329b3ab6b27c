"""
Shared fixtures for booking integration tests against PostgreSQL.
"""

from __future__ import annotations

from typing import Any, Callable, Generator

import pytest
from sqlalchemy import text
from sqlalchemy.schema import CreateSchema

from rental_bookings.config import SCHEMA
from rental_bookings.db.engine import engine
from rental_bookings.db.writers.properties import insert_property
from rental_bookings.models.base import Base
from rental_bookings.models.bookings import Booking  # noqa: F401
from rental_bookings.models.properties import Property  # noqa: F401


@pytest.fixture(scope="session", autouse=True)
def rentals_schema() -> None:
    """Create the schema, btree_gist and both tables if they are missing."""
    with engine.begin() as conn:
        conn.execute(CreateSchema(SCHEMA, if_not_exists=True))
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS btree_gist"))
        Base.metadata.create_all(conn, checkfirst=True)


@pytest.fixture
def make_property() -> Generator[Callable[..., int], None, None]:
    """
    Factory inserting a property with sensible defaults.

    Every property created through it is deleted afterwards; its bookings
    go with it through ON DELETE CASCADE.
    """
    created: list[int] = []

    def _make(**overrides: Any) -> int:
        data: dict[str, Any] = {
            "title": "Integration Test Cottage",
            "max_guests": 4,
            "rental_type": "both",
            "minimum_stay_nights": 1,
            "price_per_night": "100.00",
            "cleaning_fee": "50.00",
        }
        data.update(overrides)
        with engine.begin() as conn:
            property_id = insert_property(conn, data)
        created.append(property_id)
        return property_id

    yield _make

    if created:
        with engine.begin() as conn:
            conn.execute(
                text(f"DELETE FROM {SCHEMA}.properties WHERE id = ANY(:ids)"),
                {"ids": created},
            )
