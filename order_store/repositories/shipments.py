"""
Shipment Repository

Shipments live in their order's partition (sk = s#<shipmentId>), are indexed
on gsi1 by shipment id and on gsi2 by warehouse with the shipment date as
sort key.
"""

import logging
from typing import List, Optional

from ..identity import resolve_id
from ..keys import KeyPrefix, encode_key, iso_timestamp, strip_prefix
from ..mappers import shipment_mapper
from ..models import Shipment
from .base import SingleTableRepository, Timestamp

logger = logging.getLogger(__name__)


class ShipmentRepository(SingleTableRepository):

    def save_order_shipment(self, shipment: Shipment) -> Shipment:
        """Create or overwrite a shipment, assigning an id and date if absent."""
        shipment = shipment.model_copy(update={
            'id': resolve_id(shipment.id, KeyPrefix.SHIPMENT),
            'order_id': strip_prefix(shipment.order_id, KeyPrefix.ORDER),
            'warehouse_id': strip_prefix(shipment.warehouse_id, KeyPrefix.WAREHOUSE),
            'date': shipment.date or iso_timestamp(),
        })
        self._put(shipment_mapper, shipment)
        logger.info(f"Saved shipment {shipment.id} for order {shipment.order_id}")
        return shipment

    def get_shipment_by_id(self, shipment_id: str) -> Optional[Shipment]:
        """
        Get a shipment by id.

        DynamoDB Operation: Query gsi1 gsi1_pk=s#<id> AND gsi1_sk=s#<id>
        """
        key = encode_key(shipment_id, KeyPrefix.SHIPMENT)
        return self._query_index_exact(shipment_mapper, 1, key, key)

    def get_shipments_by_order_id(self, order_id: str) -> List[Shipment]:
        """
        Get all shipments of an order.

        DynamoDB Operation: Query pk=o#<orderId> AND begins_with(sk, 's#')
        """
        return self._query_children(
            shipment_mapper,
            encode_key(order_id, KeyPrefix.ORDER),
            KeyPrefix.SHIPMENT.value
        )

    def get_shipments_by_warehouse_id(
        self,
        warehouse_id: str,
        from_: Optional[Timestamp] = None,
        to: Optional[Timestamp] = None
    ) -> List[Shipment]:
        """
        Get shipments leaving a warehouse, optionally within a time window.

        DynamoDB Operation: Query gsi2 gsi2_pk=w#<warehouseId> [AND gsi2_sk BETWEEN from AND to]

        Returns:
            Shipments in ascending date order
        """
        return self._query_index_range(
            shipment_mapper, 2, encode_key(warehouse_id, KeyPrefix.WAREHOUSE), from_, to
        )
