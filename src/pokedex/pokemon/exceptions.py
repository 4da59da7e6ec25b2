"""Errors raised by the Pokemon service."""

import json
from typing import Any


class PokemonError(Exception):
    """Base exception for all Pokemon service errors."""


class DuplicateKeyError(PokemonError):
    """Raised when a create or update collides with another Pokemon's unique field."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Pokemon exists in db {json.dumps({field: value}, default=str)}")

    @property
    def key_value(self) -> dict[str, Any]:
        return {self.field: self.value}


class NotFoundError(PokemonError):
    """Raised when a flexible key matches no Pokemon by number, id or name."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Pokemon with id, name or no '{key}' not found")


class BadRequestError(PokemonError):
    """Raised when asked to remove a Pokemon id that does not exist."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"Pokemon with id '{document_id}' not found")


class StorageFailureError(PokemonError):
    """Raised for any other storage failure.

    The message never carries driver details; they are logged where the
    failure is detected and chained as ``__cause__``.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Can't {operation} pokemon - Check server logs")
