"""
Repository layer for the single-table order store.

Each repository is constructed with the TableGateway it sends requests
through:

    gateway = create_table_gateway(DynamoDBConfig.from_env())
    orders = OrderRepository(gateway)
    products = ProductRepository(gateway)
"""

from .base import SingleTableRepository
from .catalog import CustomerRepository, ProductRepository, WarehouseRepository
from .invoices import InvoiceRepository
from .orders import OrderRepository
from .shipments import ShipmentRepository

__all__ = [
    "SingleTableRepository",
    "CustomerRepository",
    "InvoiceRepository",
    "OrderRepository",
    "ProductRepository",
    "ShipmentRepository",
    "WarehouseRepository",
]
