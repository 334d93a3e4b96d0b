"""
Single-table repository base.

Repositories compose the key codec, an entity mapper and the injected
TableGateway into the fixed access patterns of the domain:

- direct key lookup (GetItem)
- children of a partition (Query pk = :pk AND begins_with(sk, :tag))
- exact match on a GSI (Query gsiN_pk = :key AND gsiN_sk = :key)
- time window on a GSI (Query gsiN_pk = :key AND gsiN_sk BETWEEN :from AND :to)

Absence is a normal outcome: lookups return None and queries an empty list.
Store failures propagate unchanged.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, TypeVar, Union

from boto3.dynamodb.conditions import Key

from ..core import TableGateway
from ..keys import GSI1_PK, GSI1_SK, GSI2_PK, GSI2_SK, PK, SK, normalize_timestamp
from ..mappers import EntityMapper

T = TypeVar('T')

logger = logging.getLogger(__name__)

Timestamp = Union[str, datetime]

_GSI_ATTRIBUTES = {
    1: (GSI1_PK, GSI1_SK),
    2: (GSI2_PK, GSI2_SK),
}


class SingleTableRepository:
    """Base class for repositories over the single table."""

    def __init__(self, gateway: TableGateway):
        """Initialize repository with the store gateway it issues requests through.

        Args:
            gateway: TableGateway for the single table
        """
        self.gateway = gateway

    def _index_name(self, index: int) -> str:
        return self.gateway.config.index_name(index)

    def _put(self, mapper: EntityMapper, entity: T) -> T:
        self.gateway.put_item(mapper.to_record(entity))
        return entity

    def _get(self, mapper: EntityMapper, pk: str, sk: str) -> Optional[T]:
        record = self.gateway.get_item({PK: pk, SK: sk})
        if record is None:
            logger.debug(f"No {mapper.entity_type.value} record for pk={pk!r} sk={sk!r}")
            return None
        return mapper.from_record(record)

    def _delete(self, pk: str, sk: str) -> None:
        self.gateway.delete_item({PK: pk, SK: sk})

    def _decode_all(self, mapper: EntityMapper, records: List[Dict[str, Any]]) -> List[T]:
        return [mapper.from_record(record) for record in records]

    def _query_children(self, mapper: EntityMapper, pk: str, sk_prefix: str) -> List[T]:
        """Records of one partition whose sort key starts with ``sk_prefix``, in sort key order."""
        records = self.gateway.query(
            KeyConditionExpression=Key(PK).eq(pk) & Key(SK).begins_with(sk_prefix)
        )
        return self._decode_all(mapper, records)

    def _query_index_exact(self, mapper: EntityMapper, index: int, pk: str, sk: str) -> Optional[T]:
        """First record on a GSI matching both index keys exactly, or None."""
        pk_attr, sk_attr = _GSI_ATTRIBUTES[index]
        records = self.gateway.query(
            IndexName=self._index_name(index),
            KeyConditionExpression=Key(pk_attr).eq(pk) & Key(sk_attr).eq(sk)
        )
        if not records:
            return None
        return mapper.from_record(records[0])

    def _query_index_range(
        self,
        mapper: EntityMapper,
        index: int,
        pk: str,
        from_: Optional[Timestamp] = None,
        to: Optional[Timestamp] = None
    ) -> List[T]:
        """Records on a GSI partition, optionally within an inclusive timestamp window.

        Results come back in ascending timestamp order.
        """
        pk_attr, sk_attr = _GSI_ATTRIBUTES[index]
        condition = Key(pk_attr).eq(pk)
        if from_ is not None and to is not None:
            condition = condition & Key(sk_attr).between(normalize_timestamp(from_), normalize_timestamp(to))
        elif from_ is not None:
            condition = condition & Key(sk_attr).gte(normalize_timestamp(from_))
        elif to is not None:
            condition = condition & Key(sk_attr).lte(normalize_timestamp(to))

        records = self.gateway.query(
            IndexName=self._index_name(index),
            KeyConditionExpression=condition
        )
        return self._decode_all(mapper, records)
