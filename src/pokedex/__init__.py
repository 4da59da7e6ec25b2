"""Pokedex: a Pokemon data-access layer over a document store."""

from pokedex.pokemon import PokemonService

__all__ = ["PokemonService"]
