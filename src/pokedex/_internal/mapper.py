"""Base interfaces for exception mapping."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from pokedex.documents.exceptions import DatabaseError


class MappingStrategy(ABC):
    """Strategy for mapping a specific type of driver error.

    Each strategy handles one type of error (e.g., unique violation) and
    converts it to the matching document store exception.
    """

    @abstractmethod
    def can_handle(self, error: Exception) -> bool:
        """Check if this strategy can handle the given error.

        Args:
            error: The infrastructure exception to check

        Returns:
            True if this strategy can handle the error, False otherwise
        """

    @abstractmethod
    def map(
        self,
        error: Exception,
        collection: str | None,
        document: Mapping[str, Any] | None,
    ) -> DatabaseError:
        """Map the error to a document store exception.

        Args:
            error: The infrastructure exception
            collection: Optional collection name
            document: Optional fields that were being written

        Returns:
            The mapped document store exception

        Raises:
            The original exception if mapping fails
        """


class ExceptionMapper(ABC):
    """Base interface for exception mappers.

    Each driver implementation provides its own mapper with its own
    set of mapping strategies.
    """

    @abstractmethod
    def map(
        self,
        error: Exception,
        collection: str | None = None,
        document: Mapping[str, Any] | None = None,
    ) -> DatabaseError:
        """Map an infrastructure exception to a document store exception.

        Args:
            error: The infrastructure exception (e.g., SQLAlchemy IntegrityError)
            collection: Optional collection name for better error messages
            document: Optional fields that were being written

        Returns:
            A document store exception
        """
