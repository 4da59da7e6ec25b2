"""SQLAlchemy table backing the Pokemon collection."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Same constraints as the table, for stores that enforce them themselves
UNIQUE_FIELDS = ("no", "name")


class Base(DeclarativeBase):
    pass


class PokemonDocument(Base):
    __tablename__ = "pokemon"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    no: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
