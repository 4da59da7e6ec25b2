"""Flexible key resolution.

A flexible key is a single caller-supplied string that may be a Pokemon
number, a document identifier or a name. Resolvers are tried in order and the
first one that finds a document wins.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from pokedex.documents import Document, DocumentStore
from pokedex.pokemon.models import MAX_POKEMON_NO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyResolver:
    """One interpretation of a flexible key.

    Attributes:
        kind: Short label of the interpretation, used in logs.
        parse: Returns the key's value under this interpretation, or None when
               the key cannot be read this way.
        lookup: Fetches the document for a parsed value, or None.
    """

    kind: str
    parse: Callable[[str], Any | None]
    lookup: Callable[[Any], Awaitable[Document | None]]


def parse_number(key: str) -> int | None:
    """Read a key as a Pokemon number.

    Accepts surrounding whitespace and integral floats ("6", " 6 ", "6.0").
    Values no Pokemon can be numbered with ("0", "-3", "1e20") are not
    numbers, so the key falls through to the next resolver.
    """
    text = key.strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    if not 1 <= number <= MAX_POKEMON_NO:
        return None
    return int(number)


def normalize_name(key: str) -> str:
    return key.lower().strip()


def build_key_resolvers(store: DocumentStore) -> tuple[KeyResolver, ...]:
    """Build the resolvers for a Pokemon store: number, then document id, then name."""

    def parse_document_id(key: str) -> str | None:
        return key if store.is_valid_id(key) else None

    return (
        KeyResolver("no", parse_number, lambda no: store.find_one({"no": no})),
        KeyResolver("id", parse_document_id, store.find_by_id),
        KeyResolver("name", normalize_name, lambda name: store.find_one({"name": name})),
    )


async def resolve_key(resolvers: Sequence[KeyResolver], key: str) -> Document | None:
    """Try each resolver in order and return the first document found.

    Lookups run lazily: a resolver is only queried when every earlier one
    failed to parse the key or found nothing.
    """
    for resolver in resolvers:
        value = resolver.parse(key)
        if value is None:
            continue
        document = await resolver.lookup(value)
        if document is not None:
            logger.debug("Resolved key %r by %s", key, resolver.kind)
            return document
    return None
