# Base mixins
from .base import (
    TimestampMixin,
    WireModel,
)

# Domain models
from .domain_models import (
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

__all__ = [
    # Base mixins
    "TimestampMixin",
    "WireModel",

    # Domain models
    "Customer",
    "Invoice",
    "Order",
    "OrderItem",
    "Payment",
    "Product",
    "Shipment",
    "ShipmentItem",
    "Warehouse",
]
