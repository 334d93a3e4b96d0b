"""
Entity mappers between domain models and single-table records.

Each mapper is stateless; the module-level instances below are shared by the
repositories.
"""

from .base import EntityMapper, SelfKeyedMapper
from .catalog import CustomerMapper, ProductMapper, WarehouseMapper
from .invoices import InvoiceMapper
from .orders import OrderItemMapper, OrderMapper, ShipmentItemMapper
from .shipments import ShipmentMapper

order_mapper = OrderMapper()
order_item_mapper = OrderItemMapper()
shipment_item_mapper = ShipmentItemMapper()
invoice_mapper = InvoiceMapper()
product_mapper = ProductMapper()
customer_mapper = CustomerMapper()
warehouse_mapper = WarehouseMapper()
shipment_mapper = ShipmentMapper()

__all__ = [
    # Base classes
    "EntityMapper",
    "SelfKeyedMapper",

    # Mapper classes
    "CustomerMapper",
    "InvoiceMapper",
    "OrderItemMapper",
    "OrderMapper",
    "ProductMapper",
    "ShipmentItemMapper",
    "ShipmentMapper",
    "WarehouseMapper",

    # Shared instances
    "customer_mapper",
    "invoice_mapper",
    "order_item_mapper",
    "order_mapper",
    "product_mapper",
    "shipment_item_mapper",
    "shipment_mapper",
    "warehouse_mapper",
]
