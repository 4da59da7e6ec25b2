"""Reusable strategy registry for exception mapping."""

import logging
from collections.abc import Mapping
from typing import Any

from pokedex._internal.mapper import MappingStrategy
from pokedex.documents.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Registry of mapping strategies.

    Strategies are tried in registration order until one successfully
    maps the error.
    """

    def __init__(self) -> None:
        self._strategies: list[MappingStrategy] = []

    def register(self, strategy: MappingStrategy) -> None:
        """Register a new mapping strategy.

        Args:
            strategy: The strategy to register
        """
        self._strategies.append(strategy)

    def map(
        self,
        error: Exception,
        collection: str | None = None,
        document: Mapping[str, Any] | None = None,
    ) -> DatabaseError:
        """Try to map the error using registered strategies.

        Args:
            error: The infrastructure exception
            collection: Optional collection name
            document: Optional fields that were being written

        Returns:
            The mapped exception (always a DatabaseError).
            If no strategy can handle the error, returns a generic DatabaseError.
        """
        for strategy in self._strategies:
            if strategy.can_handle(error):
                try:
                    return strategy.map(error, collection, document)
                except Exception:  # noqa: BLE001
                    # Intentionally catching all exceptions to try next strategy
                    logger.debug(
                        "Strategy %s failed to map, try the next strategy.",
                        type(strategy).__name__,
                        exc_info=True,
                    )
                    continue

        return DatabaseError(
            f"Database error during operation on {collection or 'unknown collection'}: {error}"
        )
