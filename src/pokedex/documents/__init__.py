"""Document store implementations.

Provides a unified interface for document access across different storage backends.
"""

from pokedex.documents.exceptions import (
    DUPLICATE_KEY_CODE,
    DatabaseError,
    DuplicateDocumentError,
    PaginationParameterError,
)
from pokedex.documents.protocols import (
    ASCENDING,
    DESCENDING,
    DeleteResult,
    Document,
    DocumentStore,
    UpdateResult,
)

# Implementations
from pokedex.documents.memory import InMemory
from pokedex.documents.sqlalchemy import SqlAlchemy

__all__ = [  # noqa: RUF022
    # Core
    "DocumentStore",
    "Document",
    "UpdateResult",
    "DeleteResult",
    "ASCENDING",
    "DESCENDING",
    # Exceptions
    "DUPLICATE_KEY_CODE",
    "DatabaseError",
    "DuplicateDocumentError",
    "PaginationParameterError",
    # Implementations
    "InMemory",
    "SqlAlchemy",
]
