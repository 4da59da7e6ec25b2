"""Document identifiers.

Stores assign ULID strings as document identifiers. They are 26 characters of
Crockford base32, which keeps them sortable by creation time.
"""

import re

from ulid import ULID

_ULID_PATTERN = re.compile(r"[0-7][0-9A-HJKMNP-TV-Z]{25}")


def new_document_id() -> str:
    """Generate a fresh document identifier."""
    return str(ULID())


def is_valid_document_id(value: str) -> bool:
    """Check whether a string is syntactically a document identifier."""
    if not isinstance(value, str) or _ULID_PATTERN.fullmatch(value) is None:
        return False
    try:
        ULID.from_str(value)
    except ValueError:
        return False
    return True
