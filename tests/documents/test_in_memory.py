"""
Tests for InMemory document store implementation.

This module tests the InMemory implementation by:
1. Inheriting all contract tests from DocumentStoreContractTests
2. Implementing verification methods using direct access to internal storage
3. Adding InMemory-specific tests (insertion order, unique fields)
"""

from typing import Any

import pytest
import pytest_asyncio
from ulid import ULID

from pokedex.documents import DuplicateDocumentError, InMemory
from tests.documents.test_contract import DocumentStoreContractTests


class TestInMemoryStore(DocumentStoreContractTests):
    """Test suite for InMemory store implementation."""

    # ==================== Concrete Fixtures ====================

    @pytest.fixture
    def store(self) -> InMemory:
        """Create an empty InMemory store."""
        return InMemory(collection="pokemon", unique_fields=("no", "name"))

    @pytest_asyncio.fixture
    async def store_with_documents(self, store: InMemory) -> InMemory:
        """
        Create a store with 10 pre-inserted documents.

        Uses direct access to internal storage (_documents) to avoid
        using store.create() in test setup.
        """
        for no in range(10, 0, -1):
            document_id = str(ULID())
            # Direct access to internal storage (not via create!)
            store._documents[document_id] = {  # noqa: SLF001
                "id": document_id,
                "no": no,
                "name": f"pokemon-{no}",
                "version": 0,
            }
        return store

    @pytest.fixture
    def document_ids(self, store_with_documents: InMemory) -> dict[int, str]:
        """Get document identifiers keyed by number from internal storage."""
        return {
            document["no"]: document_id
            for document_id, document in store_with_documents.documents.items()
        }

    # ==================== Verification Methods ====================

    async def _verify_document_exists(self, store: InMemory, document_id: str) -> bool:
        return document_id in store.documents

    async def _verify_document_count(self, store: InMemory) -> int:
        return len(store.documents)

    async def _verify_document_field(
        self, store: InMemory, document_id: str, field: str, expected: Any
    ) -> bool:
        document = store.documents.get(document_id)
        if document is None:
            return False
        return document.get(field) == expected

    # ==================== InMemory-Specific Tests ====================

    @pytest.mark.asyncio
    async def test_find_without_sort_keeps_insertion_order(
        self, store_with_documents: InMemory
    ) -> None:
        """Without a sort, documents should come back in insertion order."""
        result = await store_with_documents.find()
        assert [document["no"] for document in result] == list(range(10, 0, -1))

    @pytest.mark.asyncio
    async def test_no_unique_fields_allows_repeated_values(self) -> None:
        """A store without unique fields should accept repeated values."""
        store = InMemory(collection="notes")
        await store.create({"title": "same"})
        await store.create({"title": "same"})
        assert len(store.documents) == 2

    @pytest.mark.asyncio
    async def test_duplicate_error_names_collection(self, store_with_documents: InMemory) -> None:
        """DuplicateDocumentError should name the collection and the conflicting key."""
        with pytest.raises(DuplicateDocumentError, match="collection: pokemon") as exc_info:
            await store_with_documents.create({"no": 10, "name": "pokemon-10"})
        assert exc_info.value.collection == "pokemon"

    @pytest.mark.asyncio
    async def test_filter_on_missing_field_matches_nothing(
        self, store_with_documents: InMemory
    ) -> None:
        """Filtering on a field no document has should match nothing."""
        assert await store_with_documents.find({"type": "electric"}) == []

    @pytest.mark.asyncio
    async def test_create_stores_a_copy(self, store: InMemory) -> None:
        """Mutating the input after create() should not change the stored document."""
        document = {"no": 25, "name": "pikachu"}
        created = await store.create(document)
        document["name"] = "raichu"

        assert store.documents[created["id"]]["name"] == "pikachu"
