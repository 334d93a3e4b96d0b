#!/usr/bin/env python3
"""
Basic usage of the order store.

Walks through the fixed access patterns against the configured table:
1. Setting up configuration and the table gateway
2. Saving catalog entries (products, customers, warehouses)
3. Saving an order with its items in one transaction
4. Querying items by order, product and customer
5. Invoicing and shipping the order
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from order_store import (
    Customer,
    CustomerRepository,
    DynamoDBConfig,
    Invoice,
    InvoiceRepository,
    Order,
    OrderItem,
    OrderRepository,
    Payment,
    Product,
    ProductRepository,
    Shipment,
    ShipmentItem,
    ShipmentRepository,
    TransactionCancelledError,
    Warehouse,
    WarehouseRepository,
    create_table_gateway,
)


def main():
    """Demonstrate basic usage of the order store."""

    # 1. Configure DynamoDB connection
    print("1. Setting up DynamoDB configuration...")
    config = DynamoDBConfig.from_env()  # Uses environment variables

    # For local development, you might use:
    # config = DynamoDBConfig.for_local_development()

    gateway = create_table_gateway(config)
    products = ProductRepository(gateway)
    customers = CustomerRepository(gateway)
    warehouses = WarehouseRepository(gateway)
    orders = OrderRepository(gateway)
    invoices = InvoiceRepository(gateway)
    shipments = ShipmentRepository(gateway)

    # 2. Catalog
    print("2. Creating catalog entries...")
    tea = products.save_product(Product(name="Green Tea", price=Decimal("4.50")))
    mug = products.save_product(Product(name="Mug", price=Decimal("9.00")))
    customer = customers.save_customer(Customer(name="Ada Lovelace", email="ada@example.com"))
    warehouse = warehouses.save_warehouse(Warehouse(name="North", address="1 Dock Road"))
    print(f"Created products {tea.id}, {mug.id}, customer {customer.id}, warehouse {warehouse.id}")

    # 3. Order with items, written atomically
    print("3. Placing an order...")
    try:
        order, items = orders.save_order_with_items(
            Order(customer_id=customer.id),
            [
                OrderItem(order_id="", product_id=tea.id, customer_id="", price=tea.price, quantity=2),
                OrderItem(order_id="", product_id=mug.id, customer_id="", price=mug.price, quantity=1),
            ]
        )
    except TransactionCancelledError as e:
        print(f"Order was not saved, failed items: {e.failed_items}")
        return
    print(f"Created order {order.id} with {len(items)} items")

    # 4. Access patterns
    print("4. Querying...")
    now = datetime.now(timezone.utc)
    last_day = (now - timedelta(days=1), now + timedelta(minutes=1))

    print(f"Order: {orders.get_customer_order_by_id(order.id, customer.id)}")
    print(f"Items of order: {len(orders.get_order_items_by_order_id(order.id))}")
    print(f"Tea sold in the last day: {len(orders.get_order_items_by_product_id(tea.id, *last_day))}")
    print(f"Items bought by customer: {len(orders.get_order_items_by_customer_id(customer.id, *last_day))}")

    # 5. Invoice and shipment
    print("5. Invoicing and shipping...")
    total = sum(item.price * item.quantity for item in items)
    invoice = invoices.save_order_invoice(
        Invoice(order_id=order.id, amount=total, payments=[Payment(amount=total, date=now)])
    )
    print(f"Invoice by id: {invoices.get_invoice_by_id(invoice.id)}")
    print(f"Invoice by order: {invoices.get_invoice_by_order_id(order.id)}")

    shipment = shipments.save_order_shipment(
        Shipment(order_id=order.id, warehouse_id=warehouse.id, address="12 Analytical Row")
    )
    for item in items:
        orders.save_order_shipment_item(
            ShipmentItem(order_id=order.id, product_id=item.product_id, shipment_id=shipment.id, quantity=item.quantity)
        )
    print(f"Shipments from warehouse: {len(shipments.get_shipments_by_warehouse_id(warehouse.id))}")
    print(f"Shipment items of order: {len(orders.get_shipment_items_by_order_id(order.id))}")


if __name__ == "__main__":
    main()
