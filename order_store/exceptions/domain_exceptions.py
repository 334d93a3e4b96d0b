"""
Domain-Specific Exceptions for the Order Store

Organized by category:
1. Key and Record Integrity Errors
2. Data Validation Errors
3. Transaction Errors
4. Infrastructure Errors

Absence of a record is never an exception: single lookups return None and
queries return an empty list. Errors raised by botocore while talking to
DynamoDB (throttling, network, validation) are not wrapped here; they reach
the caller unchanged.
"""

from typing import Any, Dict, List, Optional

from .base import OrderStoreError


# =============================================================================
# Key and Record Integrity Errors
# =============================================================================

class MalformedRecordError(OrderStoreError):
    """Raised when a stored record cannot be decoded into the requested entity.

    Used for:
    - Records whose entityType discriminator does not match the mapper
    - Records missing a required key attribute
    """

    def __init__(self, message: str, record_type: Optional[str] = None, expected_type: Optional[str] = None):
        """Initialize malformed record error.

        Args:
            message: Human-readable error message
            record_type: entityType found on the record
            expected_type: entityType the mapper expected
        """
        self.record_type = record_type
        self.expected_type = expected_type
        super().__init__(message)
        self.with_context(record_type=record_type, expected_type=expected_type)


class MalformedKeyError(MalformedRecordError):
    """Raised when a key segment does not carry its expected prefix.

    A mismatch means either a programming error or corrupted data; the codec
    never returns a partially decoded identifier.
    """

    def __init__(self, key: Any, expected_prefix: str, reason: Optional[str] = None):
        """Initialize malformed key error.

        Args:
            key: The offending key value
            expected_prefix: Prefix tag the key should have carried
            reason: Optional detail about what is wrong with the key
        """
        self.key = key
        self.expected_prefix = expected_prefix
        message = reason or f"Key {key!r} does not start with prefix {expected_prefix!r}"
        super().__init__(message)
        self.with_context(key=key, expected_prefix=expected_prefix)


# =============================================================================
# Data Validation Errors
# =============================================================================

class ValidationError(OrderStoreError):
    """Raised when data cannot become a valid entity or request.

    Covers stored payloads that fail pydantic validation on decode (``errors``
    maps each failing field path to its message) and requests the store
    refuses before sending, such as an oversized transaction.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        self.errors = errors or {}
        super().__init__(message, original_error)
        if self.errors:
            self.with_context(fields=sorted(self.errors))


# =============================================================================
# Transaction Errors
# =============================================================================

class TransactionCancelledError(OrderStoreError):
    """Raised when DynamoDB cancels a transactional write.

    ``cancellation_reasons`` holds one entry per participating item, in the
    order the items were submitted. Items that did not cause the cancellation
    carry the code ``'None'``.
    """

    def __init__(
        self,
        message: str,
        cancellation_reasons: Optional[List[Dict[str, Any]]] = None,
        original_error: Optional[Exception] = None
    ):
        self.cancellation_reasons = cancellation_reasons or []
        context = {
            'cancellation_codes': [reason.get('Code') for reason in self.cancellation_reasons]
        }
        super().__init__(message, original_error, context)

    @property
    def failed_items(self) -> List[int]:
        """Indexes of the transaction items that caused the cancellation."""
        return [
            index for index, reason in enumerate(self.cancellation_reasons)
            if reason.get('Code') not in (None, 'None')
        ]


# =============================================================================
# Infrastructure Errors
# =============================================================================

class ConnectionError(OrderStoreError):
    """The boto3 session, resource or table handle could not be created.

    Raised lazily, on the first request a TableGateway makes. ``context``
    names the region and endpoint that were tried.
    """
