from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Alembic autogenerate reads Base.metadata, so every model module must be
    imported in alembic/env.py.
    """

    pass
