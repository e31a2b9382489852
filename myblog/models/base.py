from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all blog ORM models.

    All mapped classes should ultimately inherit from this Base; its metadata
    is what the schema bootstrap creates.
    """
    pass
