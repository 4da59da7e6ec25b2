"""SQLAlchemy session factory with environment variable configuration."""

import os

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


def create_default_session_factory(
    *,
    echo: bool = False,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create a SQLAlchemy session factory for the document stores.

    Configuration:
        - autoflush=False
        - expire_on_commit=False

    Environment variables (required):
        - POKEDEX_DB_HOST: Database host
        - POKEDEX_DB_NAME: Database name
        - POKEDEX_DB_USER: Database user
        - POKEDEX_DB_PASSWORD: Database password

    Environment variables (optional):
        - POKEDEX_DB_PORT: Database port (default: 5432)
        - POKEDEX_DB_DRIVER: Async driver (default: postgresql+asyncpg)

    Args:
        echo: Enable SQL logging if True

    Returns:
        Tuple containing (engine, session_factory)
    """
    driver = os.environ.get("POKEDEX_DB_DRIVER", "postgresql+asyncpg")
    host = os.environ["POKEDEX_DB_HOST"]
    port = os.environ.get("POKEDEX_DB_PORT", "5432")
    name = os.environ["POKEDEX_DB_NAME"]
    user = os.environ["POKEDEX_DB_USER"]
    password = os.environ["POKEDEX_DB_PASSWORD"]

    url = f"{driver}://{user}:{password}@{host}:{port}/{name}"

    engine = create_async_engine(url, echo=echo)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    return engine, session_factory


async def create_schema(engine: AsyncEngine, base: type[DeclarativeBase]) -> None:
    """Create the tables declared on ``base`` that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(base.metadata.create_all)
