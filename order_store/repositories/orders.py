"""
Order Repository

Everything stored in an order's partition (pk = o#<orderId>):

- the order row itself, sort key c#<customerId>
- order items, sort key p#<productId>, also indexed by product (gsi1) and
  by customer (gsi2) with the sale timestamp as index sort key
- shipment items, sort key d#<shipmentItemId>

Access patterns:
- order by (order id, customer id)
- items of an order
- items of a product within a time window
- items bought by a customer within a time window
- shipment items of an order
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..exceptions import ValidationError
from ..identity import resolve_id
from ..keys import KeyPrefix, encode_key, iso_timestamp, strip_prefix
from ..mappers import order_item_mapper, order_mapper, shipment_item_mapper
from ..models import Order, OrderItem, ShipmentItem
from .base import SingleTableRepository, Timestamp

logger = logging.getLogger(__name__)

# DynamoDB TransactWriteItems limit
MAX_TRANSACTION_ITEMS = 100


class OrderRepository(SingleTableRepository):
    """Orders, their items and their shipment items."""

    # =========================================================================
    # Orders
    # =========================================================================

    def _prepare_order(self, order: Order) -> Order:
        return order.model_copy(update={
            'id': resolve_id(order.id, KeyPrefix.ORDER),
            'customer_id': strip_prefix(order.customer_id, KeyPrefix.CUSTOMER),
            'date': order.date or iso_timestamp(),
        })

    def save_customer_order(self, order: Order) -> Order:
        """
        Create or overwrite the order row for (order id, customer id).

        Assigns an id when absent and defaults the date to now.

        Returns:
            The saved order with id and date filled in
        """
        order = self._prepare_order(order)
        self._put(order_mapper, order)
        logger.info(f"Saved order {order.id} for customer {order.customer_id}")
        return order

    def get_customer_order_by_id(self, order_id: str, customer_id: str) -> Optional[Order]:
        """
        Get an order by its id and the id of the customer who placed it.

        DynamoDB Operation: GetItem pk=o#<orderId>, sk=c#<customerId>

        Returns:
            The order, or None if there is no such (order, customer) pair
        """
        return self._get(
            order_mapper,
            encode_key(order_id, KeyPrefix.ORDER),
            encode_key(customer_id, KeyPrefix.CUSTOMER)
        )

    def delete_customer_order(self, order_id: str, customer_id: str) -> None:
        """Delete the order row only. Items and shipment items are left in place."""
        self._delete(
            encode_key(order_id, KeyPrefix.ORDER),
            encode_key(customer_id, KeyPrefix.CUSTOMER)
        )
        logger.info(f"Deleted order {order_id} for customer {customer_id}")

    # =========================================================================
    # Order items
    # =========================================================================

    def _prepare_order_item(self, item: OrderItem) -> OrderItem:
        return item.model_copy(update={
            'order_id': strip_prefix(item.order_id, KeyPrefix.ORDER),
            'product_id': strip_prefix(item.product_id, KeyPrefix.PRODUCT),
            'customer_id': strip_prefix(item.customer_id, KeyPrefix.CUSTOMER),
            'date': item.date or iso_timestamp(),
        })

    def save_order_item(self, item: OrderItem) -> OrderItem:
        """
        Create or overwrite the item for (order id, product id).

        Saving the same product on the same order again replaces the
        previous item. The date defaults to now and becomes the sort key of
        both the product and the customer index.
        """
        item = self._prepare_order_item(item)
        self._put(order_item_mapper, item)
        logger.info(f"Saved item for product {item.product_id} on order {item.order_id}")
        return item

    def get_order_items_by_order_id(self, order_id: str) -> List[OrderItem]:
        """
        Get all items of an order in product id order.

        DynamoDB Operation: Query pk=o#<orderId> AND begins_with(sk, 'p#')
        """
        return self._query_children(
            order_item_mapper,
            encode_key(order_id, KeyPrefix.ORDER),
            KeyPrefix.PRODUCT.value
        )

    def get_order_items_by_product_id(self, product_id: str, from_: Timestamp, to: Timestamp) -> List[OrderItem]:
        """
        Get items sold for a product between two timestamps (inclusive).

        DynamoDB Operation: Query gsi1 gsi1_pk=p#<productId> AND gsi1_sk BETWEEN from AND to

        Returns:
            Items in ascending date order
        """
        return self._query_index_range(
            order_item_mapper, 1, encode_key(product_id, KeyPrefix.PRODUCT), from_, to
        )

    def get_order_items_by_customer_id(self, customer_id: str, from_: Timestamp, to: Timestamp) -> List[OrderItem]:
        """
        Get items bought by a customer between two timestamps (inclusive).

        DynamoDB Operation: Query gsi2 gsi2_pk=c#<customerId> AND gsi2_sk BETWEEN from AND to

        Returns:
            Items in ascending date order
        """
        return self._query_index_range(
            order_item_mapper, 2, encode_key(customer_id, KeyPrefix.CUSTOMER), from_, to
        )

    def delete_order_item(self, order_id: str, product_id: str) -> None:
        self._delete(
            encode_key(order_id, KeyPrefix.ORDER),
            encode_key(product_id, KeyPrefix.PRODUCT)
        )
        logger.info(f"Deleted item for product {product_id} on order {order_id}")

    # =========================================================================
    # Shipment items
    # =========================================================================

    def save_order_shipment_item(self, item: ShipmentItem) -> ShipmentItem:
        """Create or overwrite a shipment item, assigning an id if absent."""
        item = item.model_copy(update={
            'id': resolve_id(item.id, KeyPrefix.SHIPMENT_ITEM),
            'order_id': strip_prefix(item.order_id, KeyPrefix.ORDER),
        })
        self._put(shipment_item_mapper, item)
        logger.info(f"Saved shipment item {item.id} on order {item.order_id}")
        return item

    def get_shipment_items_by_order_id(self, order_id: str) -> List[ShipmentItem]:
        """
        Get all shipment items of an order.

        DynamoDB Operation: Query pk=o#<orderId> AND begins_with(sk, 'd#')
        """
        return self._query_children(
            shipment_item_mapper,
            encode_key(order_id, KeyPrefix.ORDER),
            KeyPrefix.SHIPMENT_ITEM.value
        )

    # =========================================================================
    # Transactions
    # =========================================================================

    def save_order_with_items(
        self,
        order: Order,
        items: Sequence[OrderItem]
    ) -> Tuple[Order, List[OrderItem]]:
        """
        Write an order and all of its items atomically.

        Items are attached to the order: their order id and customer id are
        taken from the order, and items without a date inherit the order's.

        DynamoDB Operation: TransactWriteItems with one Put per record

        Returns:
            Tuple of (saved order, saved items)

        Raises:
            ValidationError: more records than a single transaction can hold
            TransactionCancelledError: DynamoDB rejected the transaction;
                nothing was written
        """
        if len(items) + 1 > MAX_TRANSACTION_ITEMS:
            raise ValidationError(
                f"An order can be saved with at most {MAX_TRANSACTION_ITEMS - 1} items in one transaction, "
                f"got {len(items)}"
            )

        order = self._prepare_order(order)
        saved_items = [
            self._prepare_order_item(item.model_copy(update={
                'order_id': order.id,
                'customer_id': order.customer_id,
                'date': item.date or order.date,
            }))
            for item in items
        ]

        transact_items = [self.gateway.put_transact_item(order_mapper.to_record(order))]
        transact_items.extend(
            self.gateway.put_transact_item(order_item_mapper.to_record(item))
            for item in saved_items
        )
        self.gateway.transact_write_items(transact_items)

        logger.info(f"Saved order {order.id} with {len(saved_items)} items")
        return order, saved_items
