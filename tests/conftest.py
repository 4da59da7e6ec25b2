"""
Shared fixtures.

Tests backed by a real PostgreSQL carry the ``postgres`` marker. Without a
Docker daemon they are skipped, unless pytest runs with ``--require-postgres``
(as CI does), in which case a container that cannot start fails the run.
"""

from collections.abc import Generator

import pytest
from testcontainers.postgres import PostgresContainer


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--require-postgres",
        action="store_true",
        default=False,
        help="fail instead of skipping when the PostgreSQL container cannot start",
    )


@pytest.fixture(scope="session")
def postgres_container(request: pytest.FixtureRequest) -> Generator[PostgresContainer, None, None]:
    """
    Start a PostgreSQL container for tests.

    Scope: session - the container is shared by every PostgreSQL-backed test,
    starting it is expensive. Each test creates and drops its own tables.
    """
    postgres = PostgresContainer("postgres:16")
    try:
        postgres.start()
    except Exception as e:  # noqa: BLE001
        if request.config.getoption("--require-postgres"):
            pytest.fail(f"PostgreSQL container unavailable: {e}")
        pytest.skip(f"PostgreSQL container unavailable: {e}")
    yield postgres
    postgres.stop()


def asyncpg_url(postgres: PostgresContainer) -> str:
    return postgres.get_connection_url().replace("postgresql+psycopg2://", "postgresql+asyncpg://")
