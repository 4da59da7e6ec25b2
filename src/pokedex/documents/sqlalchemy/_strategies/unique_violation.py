"""Strategy for handling SQLAlchemy unique constraint violations."""

import re
from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy.exc import IntegrityError
from typing_extensions import override

from pokedex._internal.mapper import MappingStrategy
from pokedex.documents.exceptions import DatabaseError, DuplicateDocumentError

_POSTGRES_UNIQUE_VIOLATION = "23505"

# PostgreSQL: DETAIL:  Key (name)=(pikachu) already exists.
_POSTGRES_DETAIL = re.compile(r"Key \((?P<field>[^)]+)\)=\((?P<value>.*)\) already exists")
# PostgreSQL: duplicate key value violates unique constraint "pokemon_name_key"
_POSTGRES_CONSTRAINT = re.compile(r'violates unique constraint "(?P<constraint>[^"]+)"')
# SQLite: UNIQUE constraint failed: pokemon.name
_SQLITE_MESSAGE = re.compile(r"UNIQUE constraint failed: (?:\w+\.)?(?P<field>\w+)")


class SqlAlchemyUniqueViolationStrategy(MappingStrategy):
    """Handle unique constraint violations (PostgreSQL sqlstate 23505, SQLite).

    Maps the violation to a DuplicateDocumentError naming the conflicting
    field and value. The value is taken from the document being written, or
    from the database message when the document does not carry the field.
    """

    @override
    def can_handle(self, error: Exception) -> bool:
        """Check if error is an IntegrityError caused by a unique constraint."""
        if not isinstance(error, IntegrityError):
            return False

        sqlstate = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
        if sqlstate == _POSTGRES_UNIQUE_VIOLATION:
            return True
        message = str(error.orig)
        return any(
            pattern.search(message) is not None
            for pattern in (_POSTGRES_CONSTRAINT, _SQLITE_MESSAGE)
        )

    @override
    def map(
        self,
        error: Exception,
        collection: str | None,
        document: Mapping[str, Any] | None,
    ) -> DatabaseError:
        """Map to DuplicateDocumentError with the conflicting field/value pair.

        Args:
            error: The IntegrityError to map (guaranteed by can_handle())
            collection: The collection name for error messages
            document: The fields that were being written
        """
        # Safe cast: can_handle() already verified it's an IntegrityError
        integrity_error = cast("IntegrityError", error)
        message = str(integrity_error.orig)

        field, value = self._parse_message(message, collection)
        # The written value keeps its type, the reported one is always text
        if document is not None and field in document:
            value = document[field]
        if value is None:
            raise error

        return DuplicateDocumentError(collection or "unknown", {field: value})

    @staticmethod
    def _parse_message(message: str, collection: str | None) -> tuple[str, Any]:
        """Extract the conflicting field, and the value when reported, from a driver message.

        PostgreSQL names column unique constraints ``<table>_<column>_key``.

        Raises:
            ValueError: If no field can be identified.
        """
        if match := _POSTGRES_DETAIL.search(message):
            return match.group("field"), match.group("value")

        if match := _SQLITE_MESSAGE.search(message):
            return match.group("field"), None

        if match := _POSTGRES_CONSTRAINT.search(message):
            constraint = match.group("constraint")
            if constraint.endswith("_key"):
                constraint = constraint[: -len("_key")]
            prefix = f"{collection}_" if collection else ""
            if prefix and constraint.startswith(prefix):
                constraint = constraint[len(prefix) :]
            return constraint, None

        msg = f"Cannot identify the conflicting field in: {message}"
        raise ValueError(msg)
