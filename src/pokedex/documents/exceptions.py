"""Document store exceptions."""

from collections.abc import Mapping
from typing import Any

DUPLICATE_KEY_CODE = 11000


class DatabaseError(Exception):
    """Base exception for all document store errors.

    Attributes:
        code: Optional machine-readable error code reported by the driver.
    """

    code: int | None = None


class DuplicateDocumentError(DatabaseError):
    """Raised when a write violates a unique field of the collection."""

    code = DUPLICATE_KEY_CODE

    def __init__(self, collection: str, key_value: Mapping[str, Any]) -> None:
        self.collection = collection
        self.key_value = dict(key_value)
        super().__init__(
            f"E{self.code} duplicate key error collection: {collection} dup key: {self.key_value}"
        )


class PaginationParameterError(DatabaseError):
    """Raised when a pagination parameter (limit or skip) is invalid."""

    def __init__(self, parameter_name: str, value: int) -> None:
        self.parameter_name = parameter_name
        self.value = value
        super().__init__(f"{parameter_name} must be non-negative, got {value}")
