"""Document store protocol definition."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pokedex.documents.identifiers import is_valid_document_id

Document = dict[str, Any]
Filter = Mapping[str, Any]
SortSpec = Sequence[tuple[str, int]]

ID_FIELD = "id"
VERSION_FIELD = "version"

ASCENDING = 1
DESCENDING = -1


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an update_one() call."""

    matched_count: int
    modified_count: int


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete_one() call."""

    deleted_count: int


class DocumentStore(ABC):
    """Abstract base class for a collection of schema-flexible documents.

    Documents are plain dictionaries. The store assigns the identifier
    (under ``ID_FIELD``) and an internal version counter (under
    ``VERSION_FIELD``) on creation, and enforces uniqueness of the fields
    declared for the collection.

    Every document handed out by a store is a copy: mutating it never changes
    what is stored.
    """

    collection: str

    @abstractmethod
    async def find(
        self,
        filter: Filter | None = None,  # noqa: A002
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int | None = None,
        exclude: Sequence[str] = (),
    ) -> list[Document]:
        """Retrieve documents matching an equality filter.

        Args:
            filter: Field/value pairs every returned document must match.
                    None or an empty mapping matches everything.
            sort: Sequence of (field, direction) pairs, direction being
                  ASCENDING or DESCENDING.
            skip: Number of matching documents to skip (must be >= 0).
            limit: Maximum number of documents to return (must be >= 0 if
                   provided). None returns all matching documents.
            exclude: Fields to strip from the returned documents.

        Returns:
            The matching documents, respecting sort, skip and limit.

        Raises:
            PaginationParameterError: If skip or limit is negative.
        """

    @abstractmethod
    async def find_one(self, filter: Filter) -> Document | None:  # noqa: A002
        """Retrieve the first document matching an equality filter, if any."""

    @abstractmethod
    async def find_by_id(self, document_id: str) -> Document | None:
        """Retrieve a document by its identifier, if it exists."""

    @abstractmethod
    async def create(self, document: Mapping[str, Any]) -> Document:
        """Insert a new document.

        Args:
            document: The document fields. Any identifier or version it
                      carries is replaced by the store.

        Returns:
            The stored document, including its assigned identifier.

        Raises:
            DuplicateDocumentError: If a unique field collides with an existing document.
        """

    @abstractmethod
    async def update_one(self, filter: Filter, changes: Mapping[str, Any]) -> UpdateResult:  # noqa: A002
        """Apply changes to the first document matching the filter.

        Only the fields present in ``changes`` are written.

        Raises:
            DuplicateDocumentError: If a change collides with another document's unique field.
        """

    @abstractmethod
    async def delete_one(self, filter: Filter) -> DeleteResult:  # noqa: A002
        """Delete the first document matching the filter."""

    def is_valid_id(self, value: str) -> bool:
        """Check whether a string is syntactically a document identifier of this store."""
        return is_valid_document_id(value)
