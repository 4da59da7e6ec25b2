"""Pokemon data-access service."""

from pokedex.pokemon.exceptions import (
    BadRequestError,
    DuplicateKeyError,
    NotFoundError,
    PokemonError,
    StorageFailureError,
)
from pokedex.pokemon.models import (
    CreatePokemonInput,
    PaginationInput,
    Pokemon,
    UpdatePokemonInput,
)
from pokedex.pokemon.schema import UNIQUE_FIELDS, PokemonDocument
from pokedex.pokemon.service import PokemonService

__all__ = [  # noqa: RUF022
    # Service
    "PokemonService",
    # Storage
    "PokemonDocument",
    "UNIQUE_FIELDS",
    # Models
    "Pokemon",
    "CreatePokemonInput",
    "UpdatePokemonInput",
    "PaginationInput",
    # Exceptions
    "PokemonError",
    "DuplicateKeyError",
    "NotFoundError",
    "BadRequestError",
    "StorageFailureError",
]
