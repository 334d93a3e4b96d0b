"""Identity assignment for entities saved without an id."""

import uuid
from typing import Optional

from .keys import strip_prefix


def new_id() -> str:
    """Generate a random 128-bit identifier."""
    return str(uuid.uuid4())


def resolve_id(id_: Optional[str], prefix) -> str:
    """Return ``id_`` with any stray prefix removed, or a fresh id if it is empty."""
    if not id_:
        return new_id()
    return strip_prefix(id_, prefix)
