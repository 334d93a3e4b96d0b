"""
Invoice mapper.

    pk=o#<orderId>  sk=i#<id>
    gsi1: i#<id> / i#<id>   (direct lookup by invoice id)
"""

from typing import Any, Dict

from ..keys import GSI1_PK, GSI1_SK, PK, SK, EntityType, KeyPrefix, decode_key, encode_key
from ..models import Invoice
from .base import EntityMapper


class InvoiceMapper(EntityMapper[Invoice]):
    entity_type = EntityType.INVOICE
    model_class = Invoice
    key_fields = frozenset({'id', 'order_id'})

    def build_keys(self, entity: Invoice) -> Dict[str, str]:
        invoice_key = encode_key(entity.id, KeyPrefix.INVOICE)
        return {
            PK: encode_key(entity.order_id, KeyPrefix.ORDER),
            SK: invoice_key,
            GSI1_PK: invoice_key,
            GSI1_SK: invoice_key,
        }

    def decode_keys(self, record: Dict[str, Any]) -> Dict[str, str]:
        return {
            'id': decode_key(record.get(GSI1_PK), KeyPrefix.INVOICE),
            'order_id': decode_key(record.get(PK), KeyPrefix.ORDER),
        }
