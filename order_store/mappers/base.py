"""
Entity Mapper Base

A mapper translates one entity type between its pydantic domain model and
the record stored in the single table:

    to_record(entity)   -> {'pk', 'sk', 'entityType', gsi keys..., payload...}
    from_record(record) -> domain model

Subclasses declare the entity type, the model class, which model fields are
embedded in keys (and therefore not stored as payload), and how to build and
decode those keys. Everything else is copied verbatim under its camelCase
wire name.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet, Generic, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import MalformedRecordError, ValidationError
from ..keys import (
    ENTITY_TYPE,
    PK,
    RESERVED_ATTRIBUTES,
    SK,
    EntityType,
    KeyPrefix,
    decode_key,
    encode_key,
    is_gsi_attribute,
)
from ..models import WireModel

T = TypeVar('T', bound=WireModel)

logger = logging.getLogger(__name__)


class EntityMapper(ABC, Generic[T]):
    """Base class for per-entity record mappers."""

    entity_type: ClassVar[EntityType]
    model_class: ClassVar[Type[WireModel]]
    key_fields: ClassVar[FrozenSet[str]] = frozenset()

    @abstractmethod
    def build_keys(self, entity: T) -> Dict[str, str]:
        """Return pk, sk and any GSI key attributes for ``entity``."""

    @abstractmethod
    def decode_keys(self, record: Dict[str, Any]) -> Dict[str, str]:
        """Return the model fields embedded in the record's key attributes."""

    def to_record(self, entity: T) -> Dict[str, Any]:
        """Encode a domain object as a store record.

        The entity must already carry its identity and defaulted fields.
        """
        record = entity.to_payload(exclude=set(self.key_fields))
        record.update(self.build_keys(entity))
        record[ENTITY_TYPE] = self.entity_type.value
        return record

    def from_record(self, record: Dict[str, Any]) -> T:
        """Decode a store record into a domain object.

        Raises:
            MalformedRecordError: record belongs to another entity type
            MalformedKeyError: a key attribute lacks its expected prefix
            ValidationError: payload does not satisfy the model
        """
        record_type = record.get(ENTITY_TYPE)
        if record_type != self.entity_type.value:
            raise MalformedRecordError(
                f"Cannot decode {record_type!r} record as {self.entity_type.value!r}",
                record_type=record_type,
                expected_type=self.entity_type.value
            )

        data = {
            name: value for name, value in record.items()
            if name not in RESERVED_ATTRIBUTES and not is_gsi_attribute(name)
        }
        data.update(self.decode_keys(record))

        try:
            return self.model_class.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Failed to convert {record_type} record to {self.model_class.__name__}: {e}")
            raise ValidationError(
                f"Failed to convert {record_type} record to {self.model_class.__name__}",
                errors={'.'.join(str(loc) for loc in err['loc']): err['msg'] for err in e.errors()},
                original_error=e
            ) from e


class SelfKeyedMapper(EntityMapper[T]):
    """Mapper for standalone entities keyed by their own id (pk = sk = tag + id)."""

    key_prefix: ClassVar[KeyPrefix]
    key_fields = frozenset({'id'})

    def build_keys(self, entity: T) -> Dict[str, str]:
        key = encode_key(entity.id, self.key_prefix)
        return {PK: key, SK: key}

    def decode_keys(self, record: Dict[str, Any]) -> Dict[str, str]:
        return {'id': decode_key(record.get(PK), self.key_prefix)}
