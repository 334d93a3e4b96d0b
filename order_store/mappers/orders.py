"""
Mappers for records living in an order's partition.

    Order         pk=o#<id>       sk=c#<customerId>
    OrderItem     pk=o#<orderId>  sk=p#<productId>
                  gsi1: p#<productId> / <date>    (product sales over time)
                  gsi2: c#<customerId> / <date>   (customer purchases over time)
    ShipmentItem  pk=o#<orderId>  sk=d#<id>
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
from ..models import Order, OrderItem, ShipmentItem
from .base import EntityMapper


class OrderMapper(EntityMapper[Order]):
    entity_type = EntityType.ORDER
    model_class = Order
    key_fields = frozenset({'id', 'customer_id'})

    def build_keys(self, entity: Order) -> Dict[str, str]:
        return {
            PK: encode_key(entity.id, KeyPrefix.ORDER),
            SK: encode_key(entity.customer_id, KeyPrefix.CUSTOMER),
        }

    def decode_keys(self, record: Dict[str, Any]) -> Dict[str, str]:
        return {
            'id': decode_key(record.get(PK), KeyPrefix.ORDER),
            'customer_id': decode_key(record.get(SK), KeyPrefix.CUSTOMER),
        }


class OrderItemMapper(EntityMapper[OrderItem]):
    entity_type = EntityType.ORDER_ITEM
    model_class = OrderItem
    key_fields = frozenset({'order_id', 'product_id', 'customer_id'})

    def build_keys(self, entity: OrderItem) -> Dict[str, str]:
        product_key = encode_key(entity.product_id, KeyPrefix.PRODUCT)
        return {
            PK: encode_key(entity.order_id, KeyPrefix.ORDER),
            SK: product_key,
            GSI1_PK: product_key,
            GSI1_SK: entity.date,
            GSI2_PK: encode_key(entity.customer_id, KeyPrefix.CUSTOMER),
            GSI2_SK: entity.date,
        }

    def decode_keys(self, record: Dict[str, Any]) -> Dict[str, str]:
        return {
            'order_id': decode_key(record.get(PK), KeyPrefix.ORDER),
            'product_id': decode_key(record.get(SK), KeyPrefix.PRODUCT),
            'customer_id': decode_key(record.get(GSI2_PK), KeyPrefix.CUSTOMER),
        }


class ShipmentItemMapper(EntityMapper[ShipmentItem]):
    entity_type = EntityType.SHIPMENT_ITEM
    model_class = ShipmentItem
    key_fields = frozenset({'id', 'order_id'})

    def build_keys(self, entity: ShipmentItem) -> Dict[str, str]:
        return {
            PK: encode_key(entity.order_id, KeyPrefix.ORDER),
            SK: encode_key(entity.id, KeyPrefix.SHIPMENT_ITEM),
        }

    def decode_keys(self, record: Dict[str, Any]) -> Dict[str, str]:
        return {
            'id': decode_key(record.get(SK), KeyPrefix.SHIPMENT_ITEM),
            'order_id': decode_key(record.get(PK), KeyPrefix.ORDER),
        }
