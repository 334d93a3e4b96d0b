from .config import DynamoDBConfig
from .exceptions import (
    ConnectionError,
    MalformedKeyError,
    MalformedRecordError,
    OrderStoreError,
    TransactionCancelledError,
    ValidationError,
)
from .models import (
    # Catalog
    Customer,
    Product,
    Warehouse,
    # Orders
    Order,
    OrderItem,
    ShipmentItem,
    # Billing
    Invoice,
    Payment,
    # Fulfilment
    Shipment,
)
from .core import (
    TableGateway,
    create_table_gateway,
)
from .repositories import (
    CustomerRepository,
    InvoiceRepository,
    OrderRepository,
    ProductRepository,
    ShipmentRepository,
    WarehouseRepository,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConnectionError",
    "MalformedKeyError",
    "MalformedRecordError",
    "OrderStoreError",
    "TransactionCancelledError",
    "ValidationError",

    # Models
    "Customer",
    "Invoice",
    "Order",
    "OrderItem",
    "Payment",
    "Product",
    "Shipment",
    "ShipmentItem",
    "Warehouse",

    # Store access
    "TableGateway",
    "create_table_gateway",

    # Repositories
    "CustomerRepository",
    "InvoiceRepository",
    "OrderRepository",
    "ProductRepository",
    "ShipmentRepository",
    "WarehouseRepository",
]
