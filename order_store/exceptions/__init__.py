# Base exception class
from .base import OrderStoreError

# Domain-specific exceptions
from .domain_exceptions import (
    ConnectionError,
    MalformedKeyError,
    MalformedRecordError,
    TransactionCancelledError,
    ValidationError,
)

__all__ = [
    # Base exception
    "OrderStoreError",

    # Domain exceptions (alphabetically ordered)
    "ConnectionError",
    "MalformedKeyError",
    "MalformedRecordError",
    "TransactionCancelledError",
    "ValidationError",
]
