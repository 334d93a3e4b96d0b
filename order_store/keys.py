"""
Key codec for the single-table layout.

Every record in the table is addressed by a composite ``pk``/``sk`` pair and,
for some entity types, by one or two GSI key pairs. Identifiers are embedded
in those keys behind a short, fixed prefix tag:

    o#<order id>    p#<product id>    c#<customer id>    i#<invoice id>
    d#<shipment item id>    s#<shipment id>    w#<warehouse id>

The tags are part of the persisted layout. Changing one is a schema migration.

GSI sort keys that carry timestamps are stored as plain ISO-8601 strings
(``2024-01-01T10:00:00.000Z``) so that lexicographic order equals
chronological order for range queries.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from .exceptions import MalformedKeyError

# Reserved attribute names
PK = "pk"
SK = "sk"
ENTITY_TYPE = "entityType"
GSI1_PK = "gsi1_pk"
GSI1_SK = "gsi1_sk"
GSI2_PK = "gsi2_pk"
GSI2_SK = "gsi2_sk"

RESERVED_ATTRIBUTES = frozenset({PK, SK, ENTITY_TYPE, GSI1_PK, GSI1_SK, GSI2_PK, GSI2_SK})


class KeyPrefix(str, Enum):
    """Prefix tags embedded in partition, sort and GSI keys."""
    ORDER = "o#"
    PRODUCT = "p#"
    CUSTOMER = "c#"
    INVOICE = "i#"
    SHIPMENT_ITEM = "d#"
    SHIPMENT = "s#"
    WAREHOUSE = "w#"


class EntityType(str, Enum):
    """Discriminator stored in the ``entityType`` attribute of every record."""
    ORDER = "order"
    ORDER_ITEM = "orderItem"
    SHIPMENT_ITEM = "shipmentItem"
    INVOICE = "invoice"
    PRODUCT = "product"
    CUSTOMER = "customer"
    SHIPMENT = "shipment"
    WAREHOUSE = "warehouse"


def _tag(prefix) -> str:
    return prefix.value if isinstance(prefix, KeyPrefix) else str(prefix)


def is_gsi_attribute(name: str) -> bool:
    """True for ``gsi<N>_pk`` / ``gsi<N>_sk`` attribute names."""
    return name.startswith("gsi") and (name.endswith("_pk") or name.endswith("_sk"))


def encode_key(id_: str, prefix) -> str:
    """Build a key segment from a raw identifier.

    Example: encode_key("42", KeyPrefix.ORDER) -> "o#42"

    Raises:
        MalformedKeyError: if the id is empty or already starts with a
            reserved tag (the result would not decode back to ``id_``).
    """
    tag = _tag(prefix)
    if not isinstance(id_, str) or not id_:
        raise MalformedKeyError(id_, tag, reason=f"Cannot encode empty identifier {id_!r} with prefix {tag!r}")
    for reserved in KeyPrefix:
        if id_.startswith(reserved.value):
            raise MalformedKeyError(
                id_, tag,
                reason=f"Identifier {id_!r} begins with reserved tag {reserved.value!r}"
            )
    return f"{tag}{id_}"


def decode_key(key: Any, prefix) -> str:
    """Strip a known prefix from a key segment and return the raw identifier.

    Raises:
        MalformedKeyError: if the key is missing, not a string, does not
            start with ``prefix`` or has nothing after it.
    """
    tag = _tag(prefix)
    if not isinstance(key, str):
        raise MalformedKeyError(key, tag, reason=f"Expected a string key with prefix {tag!r}, got {key!r}")
    if not key.startswith(tag):
        raise MalformedKeyError(key, tag)
    id_ = key[len(tag):]
    if not id_:
        raise MalformedKeyError(key, tag, reason=f"Key {key!r} has no identifier after prefix {tag!r}")
    return id_


def strip_prefix(value: str, prefix) -> str:
    """Remove any leading copies of ``prefix`` from an identifier.

    Tolerates ids that already went through the codec once or more. Values
    without the prefix are returned unchanged.
    """
    tag = _tag(prefix)
    while value.startswith(tag):
        value = value[len(tag):]
    return value


def iso_timestamp(value: Optional[datetime] = None) -> str:
    """Format a datetime as the canonical stored timestamp.

    Naive datetimes are assumed to be UTC. Defaults to the current time.
    """
    if value is None:
        value = datetime.now(timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def normalize_timestamp(value: Union[str, datetime]) -> str:
    """Convert a datetime or ISO-8601 string to the canonical stored timestamp.

    Raises:
        ValueError: if the value is neither a datetime nor a parseable ISO string
    """
    if isinstance(value, datetime):
        return iso_timestamp(value)
    if isinstance(value, str):
        try:
            # Handle both 'Z' and '+00:00' timezone formats
            return iso_timestamp(datetime.fromisoformat(value.replace('Z', '+00:00')))
        except ValueError as e:
            raise ValueError(f"Invalid timestamp format: {value}. Expected ISO format.") from e
    raise ValueError(f"Invalid timestamp type: {type(value)}. Expected datetime object or ISO string.")
