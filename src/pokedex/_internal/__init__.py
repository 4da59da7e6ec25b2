"""Internal utilities for Pokedex.

This module contains code shared between different modules.
It is not part of the public API.
"""

from pokedex._internal.mapper import ExceptionMapper, MappingStrategy
from pokedex._internal.registry import StrategyRegistry

__all__ = [
    "ExceptionMapper",
    "MappingStrategy",
    "StrategyRegistry",
]
