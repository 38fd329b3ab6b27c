"""
SQLAlchemy engine singleton with connection pooling.

A single engine instance is shared by the API and scripts. Route handlers
receive it through rental_bookings.dependencies.get_db_engine so tests can
swap it out.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from rental_bookings.config import DATABASE_URL, DEBUG

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")

engine: Engine = create_engine(
    DATABASE_URL,
    future=True,
    pool_size=10,
    max_overflow=20,
    pool_pre_ping=True,  # detect stale connections before use
    pool_recycle=3600,
    echo=DEBUG,
)


def check_engine_health() -> bool:
    """
    Check that the database answers a trivial query.

    Used by the /ready endpoint and by the test suite to decide whether
    integration tests can run.

    Returns:
        bool: True if database is reachable, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
