"""
Shipment mapper.

    pk=o#<orderId>  sk=s#<id>
    gsi1: s#<id> / s#<id>            (direct lookup by shipment id)
    gsi2: w#<warehouseId> / <date>   (warehouse shipments over time)
"""

from typing import Any, Dict

from ..keys import (
    GSI1_PK,
    GSI1_SK,
    GSI2_PK,
    GSI2_SK,
    PK,
    SK,
    EntityType,
    KeyPrefix,
    decode_key,
    encode_key,
)
from ..models import Shipment
from .base import EntityMapper


class ShipmentMapper(EntityMapper[Shipment]):
    entity_type = EntityType.SHIPMENT
    model_class = Shipment
    key_fields = frozenset({'id', 'order_id', 'warehouse_id'})

    def build_keys(self, entity: Shipment) -> Dict[str, str]:
        shipment_key = encode_key(entity.id, KeyPrefix.SHIPMENT)
        return {
            PK: encode_key(entity.order_id, KeyPrefix.ORDER),
            SK: shipment_key,
            GSI1_PK: shipment_key,
            GSI1_SK: shipment_key,
            GSI2_PK: encode_key(entity.warehouse_id, KeyPrefix.WAREHOUSE),
            GSI2_SK: entity.date,
        }

    def decode_keys(self, record: Dict[str, Any]) -> Dict[str, str]:
        return {
            'id': decode_key(record.get(SK), KeyPrefix.SHIPMENT),
            'order_id': decode_key(record.get(PK), KeyPrefix.ORDER),
            'warehouse_id': decode_key(record.get(GSI2_PK), KeyPrefix.WAREHOUSE),
        }
