"""Pokemon records and the inputs accepted by the service."""

from pydantic import BaseModel, Field

DEFAULT_PAGE_LIMIT = 10

# Pokemon numbers live in a 32-bit signed integer column.
MAX_POKEMON_NO = 2**31 - 1


class Pokemon(BaseModel):
    """A stored Pokemon, as returned to callers."""

    id: str
    no: int
    name: str


class CreatePokemonInput(BaseModel):
    no: int = Field(ge=1, le=MAX_POKEMON_NO)
    name: str = Field(min_length=1)


class UpdatePokemonInput(BaseModel):
    """Partial update: only the fields explicitly set are applied."""

    no: int | None = Field(default=None, ge=1, le=MAX_POKEMON_NO)
    name: str | None = Field(default=None, min_length=1)


class PaginationInput(BaseModel):
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=0)
    offset: int = Field(default=0, ge=0)
