"""Pokemon service: the data-access facade over a document store."""

from __future__ import annotations

import logging
from typing import NoReturn

from pokedex.documents import ASCENDING, DUPLICATE_KEY_CODE, DatabaseError, Document, DocumentStore
from pokedex.documents.protocols import ID_FIELD, VERSION_FIELD
from pokedex.pokemon.exceptions import (
    BadRequestError,
    DuplicateKeyError,
    NotFoundError,
    StorageFailureError,
)
from pokedex.pokemon.models import CreatePokemonInput, PaginationInput, Pokemon, UpdatePokemonInput
from pokedex.pokemon.resolution import build_key_resolvers, resolve_key

logger = logging.getLogger(__name__)


class PokemonService:
    """Create, look up, list, update and remove Pokemon.

    Names are always stored lower-cased. Lookups and updates accept a
    flexible key: a Pokemon number, a document identifier or a name, tried
    in that order.

    The service holds no state besides the store, so one instance can serve
    concurrent callers. Uniqueness of ``no`` and ``name`` is enforced by the
    store.

    Example:
        service = PokemonService(InMemory("pokemon", unique_fields=("no", "name")))
        await service.create(CreatePokemonInput(no=25, name="Pikachu"))
        await service.find_one("pikachu")
    """

    def __init__(self, store: DocumentStore) -> None:
        """Initialize the service.

        Args:
            store: The document store holding the Pokemon collection. It must
                   enforce uniqueness of ``no`` and ``name``.
        """
        self.store = store
        self._key_resolvers = build_key_resolvers(store)

    async def create(self, pokemon_input: CreatePokemonInput) -> Pokemon:
        """Store a new Pokemon.

        Args:
            pokemon_input: The validated fields of the new Pokemon.

        Returns:
            The stored Pokemon, with its assigned identifier.

        Raises:
            DuplicateKeyError: If the number or the name is already taken.
            StorageFailureError: For any other storage failure.
        """
        document = pokemon_input.model_dump()
        document["name"] = document["name"].lower()

        try:
            created = await self.store.create(document)
        except DatabaseError as e:
            self._handle_exception(e, operation="create")

        logger.debug("Created pokemon %s (no=%s)", created[ID_FIELD], created["no"])
        return Pokemon.model_validate(created)

    async def find_page(self, pagination: PaginationInput | None = None) -> list[Pokemon]:
        """List Pokemon ordered by number.

        Args:
            pagination: Limit and offset of the page. Defaults to the first 10.

        Returns:
            Up to ``limit`` Pokemon starting at ``offset``; possibly empty.

        Raises:
            StorageFailureError: If the store fails.
        """
        pagination = pagination or PaginationInput()
        try:
            documents = await self.store.find(
                sort=[("no", ASCENDING)],
                skip=pagination.offset,
                limit=pagination.limit,
                exclude=(VERSION_FIELD,),
            )
        except DatabaseError as e:
            self._handle_exception(e, operation="list")
        return [Pokemon.model_validate(document) for document in documents]

    async def find_one(self, key: str) -> Pokemon:
        """Look up a Pokemon by number, document identifier or name.

        Raises:
            NotFoundError: If no interpretation of the key matches a Pokemon.
            StorageFailureError: If the store fails.
        """
        return Pokemon.model_validate(await self._find_document(key))

    async def update(self, key: str, patch: UpdatePokemonInput) -> Pokemon:
        """Apply a partial update to the Pokemon a flexible key resolves to.

        Only the fields set on ``patch`` change; a new name is lower-cased.

        Returns:
            The Pokemon as stored after the update.

        Raises:
            NotFoundError: If the key matches no Pokemon.
            DuplicateKeyError: If the new number or name belongs to another Pokemon.
            StorageFailureError: For any other storage failure.
        """
        document = await self._find_document(key)
        document_id = document[ID_FIELD]

        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].lower()

        try:
            await self.store.update_one({ID_FIELD: document_id}, changes)
            updated = await self.store.find_by_id(document_id)
        except DatabaseError as e:
            self._handle_exception(e, operation="update")

        if updated is None:
            # Removed between the lookup and the update
            raise NotFoundError(key)
        logger.debug("Updated pokemon %s with %s", document_id, sorted(changes))
        return Pokemon.model_validate(updated)

    async def remove(self, document_id: str) -> None:
        """Delete a Pokemon by its exact document identifier.

        Raises:
            BadRequestError: If no Pokemon has this identifier.
            StorageFailureError: If the store fails.
        """
        try:
            result = await self.store.delete_one({ID_FIELD: document_id})
        except DatabaseError as e:
            self._handle_exception(e, operation="remove")

        if result.deleted_count == 0:
            raise BadRequestError(document_id)
        logger.debug("Removed pokemon %s", document_id)

    async def _find_document(self, key: str) -> Document:
        try:
            document = await resolve_key(self._key_resolvers, key)
        except DatabaseError as e:
            self._handle_exception(e, operation="find")

        if document is None:
            raise NotFoundError(key)
        return document

    def _handle_exception(self, error: DatabaseError, operation: str) -> NoReturn:
        """Translate a store failure into a service error.

        Raises:
            DuplicateKeyError: If the store reported a duplicate key.
            StorageFailureError: Otherwise, after logging the failure.
        """
        key_value = getattr(error, "key_value", None)
        if error.code == DUPLICATE_KEY_CODE and key_value:
            field, value = next(iter(key_value.items()))
            raise DuplicateKeyError(field, value) from error

        logger.error("Storage failure during pokemon %s", operation, exc_info=error)
        raise StorageFailureError(operation) from error
