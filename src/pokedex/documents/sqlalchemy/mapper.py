"""SQLAlchemy exception mapper."""

from collections.abc import Mapping
from typing import Any

from typing_extensions import override

from pokedex._internal.mapper import ExceptionMapper
from pokedex._internal.registry import StrategyRegistry
from pokedex.documents.exceptions import DatabaseError
from pokedex.documents.sqlalchemy._strategies.unique_violation import (
    SqlAlchemyUniqueViolationStrategy,
)


class SqlAlchemyExceptionMapper(ExceptionMapper):
    """Maps SQLAlchemy exceptions to document store exceptions.

    Uses a registry of strategies to handle different types of errors.
    Each strategy is specific to a type of database constraint violation.
    """

    def __init__(self) -> None:
        self._registry = StrategyRegistry()
        self._register_strategies()

    def _register_strategies(self) -> None:
        """Register all SQLAlchemy-specific mapping strategies.

        Strategies are tried in registration order.
        """
        self._registry.register(SqlAlchemyUniqueViolationStrategy())

    @override
    def map(
        self,
        error: Exception,
        collection: str | None = None,
        document: Mapping[str, Any] | None = None,
    ) -> DatabaseError:
        """Map a SQLAlchemy exception to a document store exception.

        Args:
            error: The SQLAlchemy exception
            collection: The collection (table) name
            document: The fields that were being written

        Returns:
            The mapped exception, a generic DatabaseError when no strategy applies
        """
        return self._registry.map(error, collection, document)
