"""
Tests for SqlAlchemyUniqueViolationStrategy and the exception mapper.

IntegrityErrors are built by hand around fake driver exceptions carrying the
messages PostgreSQL and SQLite report, so no database is needed.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from pokedex._internal.registry import StrategyRegistry
from pokedex.documents import DUPLICATE_KEY_CODE, DatabaseError, DuplicateDocumentError
from pokedex.documents.sqlalchemy._strategies.unique_violation import (
    SqlAlchemyUniqueViolationStrategy,
)
from pokedex.documents.sqlalchemy.mapper import SqlAlchemyExceptionMapper


class FakeDriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def integrity_error(message: str, sqlstate: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT INTO pokemon ...", {}, FakeDriverError(message, sqlstate))


POSTGRES_NAME_VIOLATION = (
    'duplicate key value violates unique constraint "pokemon_name_key"\n'
    "DETAIL:  Key (name)=(pikachu) already exists."
)


class TestSqlAlchemyUniqueViolationStrategy:
    @pytest.fixture
    def strategy(self) -> SqlAlchemyUniqueViolationStrategy:
        return SqlAlchemyUniqueViolationStrategy()

    # ==================== can_handle ====================

    def test_can_handle_postgres_sqlstate(self, strategy: SqlAlchemyUniqueViolationStrategy) -> None:
        assert strategy.can_handle(integrity_error("anything", sqlstate="23505"))

    def test_can_handle_postgres_message(self, strategy: SqlAlchemyUniqueViolationStrategy) -> None:
        """The constraint message is enough when the driver exposes no sqlstate."""
        assert strategy.can_handle(integrity_error(POSTGRES_NAME_VIOLATION))

    def test_can_handle_sqlite_message(self, strategy: SqlAlchemyUniqueViolationStrategy) -> None:
        assert strategy.can_handle(integrity_error("UNIQUE constraint failed: pokemon.no"))

    def test_cannot_handle_other_integrity_error(
        self, strategy: SqlAlchemyUniqueViolationStrategy
    ) -> None:
        """Not-null violations (sqlstate 23502) are not uniqueness violations."""
        error = integrity_error('null value in column "name" violates not-null', "23502")
        assert not strategy.can_handle(error)

    def test_cannot_handle_non_integrity_error(
        self, strategy: SqlAlchemyUniqueViolationStrategy
    ) -> None:
        assert not strategy.can_handle(ValueError("UNIQUE constraint failed: pokemon.no"))
        assert not strategy.can_handle(
            OperationalError("SELECT 1", {}, FakeDriverError("connection refused"))
        )

    # ==================== map ====================

    def test_map_postgres_detail(self, strategy: SqlAlchemyUniqueViolationStrategy) -> None:
        """Field and value should be read from the DETAIL line."""
        error = integrity_error(POSTGRES_NAME_VIOLATION, sqlstate="23505")

        mapped = strategy.map(error, "pokemon", None)

        assert isinstance(mapped, DuplicateDocumentError)
        assert mapped.code == DUPLICATE_KEY_CODE
        assert mapped.key_value == {"name": "pikachu"}
        assert mapped.collection == "pokemon"

    def test_map_prefers_written_value(self, strategy: SqlAlchemyUniqueViolationStrategy) -> None:
        """The written value keeps its type where the message only has text."""
        error = integrity_error(
            'duplicate key value violates unique constraint "pokemon_no_key"\n'
            "DETAIL:  Key (no)=(25) already exists.",
            sqlstate="23505",
        )

        mapped = strategy.map(error, "pokemon", {"no": 25, "name": "pikachu"})

        assert mapped.key_value == {"no": 25}

    def test_map_postgres_constraint_name(self, strategy: SqlAlchemyUniqueViolationStrategy) -> None:
        """Without DETAIL, the field comes from the constraint name."""
        error = integrity_error(
            'duplicate key value violates unique constraint "pokemon_no_key"', sqlstate="23505"
        )

        mapped = strategy.map(error, "pokemon", {"no": 6})

        assert mapped.key_value == {"no": 6}

    def test_map_sqlite(self, strategy: SqlAlchemyUniqueViolationStrategy) -> None:
        error = integrity_error("UNIQUE constraint failed: pokemon.name")

        mapped = strategy.map(error, "pokemon", {"no": 1, "name": "bulbasaur"})

        assert mapped.key_value == {"name": "bulbasaur"}

    def test_map_without_value_raises_original(
        self, strategy: SqlAlchemyUniqueViolationStrategy
    ) -> None:
        """When the value is neither reported nor written, the original error is raised."""
        error = integrity_error("UNIQUE constraint failed: pokemon.name")

        with pytest.raises(IntegrityError):
            strategy.map(error, "pokemon", {"no": 1})


class TestSqlAlchemyExceptionMapper:
    def test_maps_unique_violation(self) -> None:
        mapper = SqlAlchemyExceptionMapper()
        error = integrity_error(POSTGRES_NAME_VIOLATION, sqlstate="23505")

        mapped = mapper.map(error, collection="pokemon", document={"name": "pikachu"})

        assert isinstance(mapped, DuplicateDocumentError)
        assert mapped.key_value == {"name": "pikachu"}

    def test_falls_back_to_database_error(self) -> None:
        mapper = SqlAlchemyExceptionMapper()
        error = OperationalError("SELECT 1", {}, FakeDriverError("connection refused"))

        mapped = mapper.map(error, collection="pokemon")

        assert type(mapped) is DatabaseError
        assert "pokemon" in str(mapped)

    def test_failed_strategy_falls_back_to_database_error(self) -> None:
        """A strategy that cannot finish mapping lets the registry fall back."""
        mapper = SqlAlchemyExceptionMapper()
        error = integrity_error("UNIQUE constraint failed: pokemon.name")

        mapped = mapper.map(error, collection="pokemon", document={})

        assert type(mapped) is DatabaseError


class TestStrategyRegistry:
    def test_empty_registry_returns_database_error(self) -> None:
        mapped = StrategyRegistry().map(RuntimeError("boom"))

        assert type(mapped) is DatabaseError
        assert "unknown collection" in str(mapped)

    def test_strategies_tried_in_registration_order(self) -> None:
        registry = StrategyRegistry()
        registry.register(SqlAlchemyUniqueViolationStrategy())
        error = integrity_error("UNIQUE constraint failed: pokemon.no")

        mapped = registry.map(error, "pokemon", {"no": 4})

        assert isinstance(mapped, DuplicateDocumentError)
