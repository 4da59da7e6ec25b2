"""SQLAlchemy document store implementation."""

from pokedex.documents.sqlalchemy.session_factory import (
    create_default_session_factory,
    create_schema,
)
from pokedex.documents.sqlalchemy.store import SqlAlchemy

__all__ = ["SqlAlchemy", "create_default_session_factory", "create_schema"]
