"""
Domain Models for the Order Store

One pydantic model per logical entity stored in the single table:

1. Catalog: Product, Customer, Warehouse
2. Orders: Order, OrderItem, ShipmentItem
3. Billing: Invoice, Payment
4. Fulfilment: Shipment

Identifiers are optional on models that get one assigned on save. None of
the models carry the ``entityType`` discriminator; that lives only in the
stored record.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from .base import TimestampMixin, WireModel


# =============================================================================
# Catalog
# =============================================================================

class Product(WireModel):
    """A sellable product."""

    id: Optional[str] = Field(None, description="Product identifier, assigned on save if absent")
    name: str = Field(..., description="Product name")
    price: Decimal = Field(..., description="Unit price")


class Customer(WireModel):
    """A customer placing orders."""

    id: Optional[str] = Field(None, description="Customer identifier, assigned on save if absent")
    name: str = Field(..., description="Customer name")
    email: Optional[str] = Field(None, description="Contact email")


class Warehouse(WireModel):
    """A warehouse shipments leave from."""

    id: Optional[str] = Field(None, description="Warehouse identifier, assigned on save if absent")
    name: str = Field(..., description="Warehouse name")
    address: Optional[str] = Field(None, description="Postal address")


# =============================================================================
# Orders
# =============================================================================

class Order(TimestampMixin, WireModel):
    """An order placed by a customer.

    The customer id is part of the order's sort key, so an order row is
    unique per (order, customer) pair.
    """

    id: Optional[str] = Field(None, description="Order identifier, assigned on save if absent")
    customer_id: str = Field(..., description="Customer who placed the order")
    date: Optional[str] = Field(None, description="Order timestamp, defaults to save time")


class OrderItem(TimestampMixin, WireModel):
    """A product line within an order. At most one per (order, product)."""

    order_id: str = Field(..., description="Owning order")
    product_id: str = Field(..., description="Ordered product")
    customer_id: str = Field(..., description="Customer who placed the order")
    price: Decimal = Field(..., description="Unit price at time of sale")
    quantity: int = Field(..., description="Ordered quantity")
    date: Optional[str] = Field(None, description="Sale timestamp, defaults to save time")


class ShipmentItem(WireModel):
    """Quantity of an ordered product assigned to a shipment."""

    id: Optional[str] = Field(None, description="Shipment item identifier, assigned on save if absent")
    order_id: str = Field(..., description="Owning order")
    product_id: str = Field(..., description="Shipped product")
    shipment_id: str = Field(..., description="Shipment carrying the item")
    quantity: int = Field(..., description="Shipped quantity")


# =============================================================================
# Billing
# =============================================================================

class Payment(TimestampMixin, WireModel):
    """A payment made against an invoice."""

    amount: Decimal = Field(..., description="Paid amount")
    date: Optional[str] = Field(None, description="Payment timestamp")


class Invoice(TimestampMixin, WireModel):
    """An invoice raised for an order."""

    id: Optional[str] = Field(None, description="Invoice identifier, assigned on save if absent")
    order_id: str = Field(..., description="Invoiced order")
    payments: Optional[List[Payment]] = Field(None, description="Payments in the order they were made")
    amount: Decimal = Field(..., description="Invoiced amount")
    date: Optional[str] = Field(None, description="Invoice timestamp, defaults to save time")


# =============================================================================
# Fulfilment
# =============================================================================

class Shipment(TimestampMixin, WireModel):
    """A shipment of (part of) an order from a warehouse."""

    id: Optional[str] = Field(None, description="Shipment identifier, assigned on save if absent")
    order_id: str = Field(..., description="Order being shipped")
    warehouse_id: str = Field(..., description="Warehouse the shipment leaves from")
    address: Optional[str] = Field(None, description="Delivery address")
    date: Optional[str] = Field(None, description="Shipment timestamp, defaults to save time")
