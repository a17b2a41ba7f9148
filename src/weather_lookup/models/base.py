from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base shared by the saved-query tables.

    Use this class as the declarative base for all ORM models so that
    `init_schema()` can create every table from one metadata object.
    """

    pass
