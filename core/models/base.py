"""Declarative base for all SQLAlchemy models.

Models subclass ``Base`` and provide ``to_dict()``, the serialisation
interface used by repositories and routers.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all books API models."""
    pass
