"""Repositories for products, customers and warehouses."""

import logging
from typing import Optional

from ..identity import resolve_id
from ..keys import KeyPrefix, encode_key
from ..mappers import customer_mapper, product_mapper, warehouse_mapper
from ..models import Customer, Product, Warehouse
from .base import SingleTableRepository

logger = logging.getLogger(__name__)


class ProductRepository(SingleTableRepository):
    """Products, keyed pk = sk = p#<id>."""

    def save_product(self, product: Product) -> Product:
        """
        Create or fully overwrite a product.

        A product without an id gets a new one. No version check is made;
        concurrent saves of the same product resolve as last writer wins.

        Returns:
            The saved product with its id
        """
        product = product.model_copy(update={'id': resolve_id(product.id, KeyPrefix.PRODUCT)})
        self._put(product_mapper, product)
        logger.info(f"Saved product {product.id}")
        return product

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Get a product by id. Returns None if it does not exist."""
        key = encode_key(product_id, KeyPrefix.PRODUCT)
        return self._get(product_mapper, key, key)

    def delete_product(self, product_id: str) -> None:
        key = encode_key(product_id, KeyPrefix.PRODUCT)
        self._delete(key, key)
        logger.info(f"Deleted product {product_id}")


class CustomerRepository(SingleTableRepository):
    """Customers, keyed pk = sk = c#<id>."""

    def save_customer(self, customer: Customer) -> Customer:
        """Create or fully overwrite a customer, assigning an id if absent."""
        customer = customer.model_copy(update={'id': resolve_id(customer.id, KeyPrefix.CUSTOMER)})
        self._put(customer_mapper, customer)
        logger.info(f"Saved customer {customer.id}")
        return customer

    def get_customer_by_id(self, customer_id: str) -> Optional[Customer]:
        """Get a customer by id. Returns None if it does not exist."""
        key = encode_key(customer_id, KeyPrefix.CUSTOMER)
        return self._get(customer_mapper, key, key)

    def delete_customer(self, customer_id: str) -> None:
        key = encode_key(customer_id, KeyPrefix.CUSTOMER)
        self._delete(key, key)
        logger.info(f"Deleted customer {customer_id}")


class WarehouseRepository(SingleTableRepository):
    """Warehouses, keyed pk = sk = w#<id>."""

    def save_warehouse(self, warehouse: Warehouse) -> Warehouse:
        warehouse = warehouse.model_copy(update={'id': resolve_id(warehouse.id, KeyPrefix.WAREHOUSE)})
        self._put(warehouse_mapper, warehouse)
        logger.info(f"Saved warehouse {warehouse.id}")
        return warehouse

    def get_warehouse_by_id(self, warehouse_id: str) -> Optional[Warehouse]:
        key = encode_key(warehouse_id, KeyPrefix.WAREHOUSE)
        return self._get(warehouse_mapper, key, key)

    def delete_warehouse(self, warehouse_id: str) -> None:
        key = encode_key(warehouse_id, KeyPrefix.WAREHOUSE)
        self._delete(key, key)
        logger.info(f"Deleted warehouse {warehouse_id}")
