"""In-memory document store implementation."""

from pokedex.documents.memory.store import InMemory

__all__ = ["InMemory"]
