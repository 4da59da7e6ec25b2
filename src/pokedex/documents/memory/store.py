"""In-memory implementation of the DocumentStore."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from typing_extensions import override

from pokedex.documents.exceptions import DuplicateDocumentError, PaginationParameterError
from pokedex.documents.identifiers import new_document_id
from pokedex.documents.protocols import (
    DESCENDING,
    ID_FIELD,
    VERSION_FIELD,
    DeleteResult,
    Document,
    DocumentStore,
    Filter,
    SortSpec,
    UpdateResult,
)


class InMemory(DocumentStore):
    """In-memory implementation of the DocumentStore.

    Documents are kept in a dictionary keyed by their identifier, in insertion
    order. Unique fields are enforced on every write.

    Attributes:
        collection: Name of the collection, used in error messages.
        unique_fields: Fields whose values must not repeat across documents.

    Example:
        store = InMemory(collection="pokemon", unique_fields=("no", "name"))
        created = await store.create({"no": 25, "name": "pikachu"})
        await store.find_by_id(created["id"])
    """

    def __init__(self, collection: str, *, unique_fields: Sequence[str] = ()) -> None:
        """Initialize an empty in-memory collection.

        Args:
            collection: Name of the collection.
            unique_fields: Fields that must be unique across documents.
        """
        self._documents: dict[str, Document] = {}
        self.collection = collection
        self.unique_fields = tuple(unique_fields)

    @property
    def documents(self) -> dict[str, Document]:
        """Get direct access to the stored documents.

        Returns:
            Dictionary mapping document identifiers to documents.

        Note:
            This property exposes internal storage for testing purposes.
            Direct modification bypasses uniqueness checks - use create(),
            update_one() and delete_one() instead.
        """
        return self._documents

    def _matches(self, document: Document, filter: Filter | None) -> bool:  # noqa: A002
        if not filter:
            return True
        return all(
            field in document and document[field] == value for field, value in filter.items()
        )

    def _first_match(self, filter: Filter) -> Document | None:  # noqa: A002
        return next((doc for doc in self._documents.values() if self._matches(doc, filter)), None)

    def _ensure_unique(self, candidate: Mapping[str, Any], ignore_id: str | None = None) -> None:
        """Ensure no other document shares a unique field value with the candidate.

        Args:
            candidate: The fields about to be written.
            ignore_id: Identifier of the document being updated, which may keep its own values.

        Raises:
            DuplicateDocumentError: On the first colliding unique field.
        """
        for field in self.unique_fields:
            if field not in candidate:
                continue
            value = candidate[field]
            for document_id, document in self._documents.items():
                if document_id != ignore_id and document.get(field) == value:
                    raise DuplicateDocumentError(self.collection, {field: value})

    @override
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

        Without a sort, documents come back in insertion order.

        Raises:
            PaginationParameterError: If skip or limit is negative.
        """
        if limit is not None and limit < 0:
            msg = "limit"
            raise PaginationParameterError(msg, limit)
        if skip < 0:
            msg = "skip"
            raise PaginationParameterError(msg, skip)

        result = [doc for doc in self._documents.values() if self._matches(doc, filter)]
        # Stable sorts applied from the least to the most significant key
        for field, direction in reversed(list(sort or ())):
            result.sort(key=lambda doc, f=field: doc.get(f), reverse=direction == DESCENDING)

        end = None if limit is None else skip + limit
        return [
            {k: copy.deepcopy(v) for k, v in doc.items() if k not in exclude}
            for doc in result[skip:end]
        ]

    @override
    async def find_one(self, filter: Filter) -> Document | None:  # noqa: A002
        document = self._first_match(filter)
        return copy.deepcopy(document) if document is not None else None

    @override
    async def find_by_id(self, document_id: str) -> Document | None:
        document = self._documents.get(str(document_id))
        return copy.deepcopy(document) if document is not None else None

    @override
    async def create(self, document: Mapping[str, Any]) -> Document:
        """Insert a new document with a freshly assigned identifier.

        Raises:
            DuplicateDocumentError: If a unique field collides with an existing document.
        """
        self._ensure_unique(document)
        stored = copy.deepcopy(dict(document))
        stored[ID_FIELD] = new_document_id()
        stored[VERSION_FIELD] = 0
        self._documents[stored[ID_FIELD]] = stored
        return copy.deepcopy(stored)

    @override
    async def update_one(self, filter: Filter, changes: Mapping[str, Any]) -> UpdateResult:  # noqa: A002
        """Apply changes to the first document matching the filter.

        Raises:
            DuplicateDocumentError: If a change collides with another document's unique field.
        """
        document = self._first_match(filter)
        if document is None:
            return UpdateResult(matched_count=0, modified_count=0)

        self._ensure_unique(changes, ignore_id=document[ID_FIELD])
        modified = any(document.get(field) != value for field, value in changes.items())
        document.update(copy.deepcopy(dict(changes)))
        return UpdateResult(matched_count=1, modified_count=int(modified))

    @override
    async def delete_one(self, filter: Filter) -> DeleteResult:  # noqa: A002
        document = self._first_match(filter)
        if document is None:
            return DeleteResult(deleted_count=0)
        del self._documents[document[ID_FIELD]]
        return DeleteResult(deleted_count=1)
