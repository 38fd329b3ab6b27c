"""
FastAPI dependency providers.

Routes take the engine through Depends(get_db_engine) rather than importing
the singleton, so tests can replace it with app.dependency_overrides.
"""

from __future__ import annotations

from typing import Generator

from sqlalchemy.engine import Engine

from rental_bookings.db.engine import engine


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide the database engine.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> mock_engine = Mock(spec=Engine)
        >>> app.dependency_overrides[get_db_engine] = lambda: mock_engine
        >>> client = TestClient(app)
        >>> client.get("/bookings/1")
    """
    yield engine
