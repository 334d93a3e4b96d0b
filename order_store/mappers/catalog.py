"""Mappers for standalone catalog records: products, customers and warehouses."""

from ..keys import EntityType, KeyPrefix
from ..models import Customer, Product, Warehouse
from .base import SelfKeyedMapper


class ProductMapper(SelfKeyedMapper[Product]):
    """pk = sk = p#<id>"""
    entity_type = EntityType.PRODUCT
    model_class = Product
    key_prefix = KeyPrefix.PRODUCT


class CustomerMapper(SelfKeyedMapper[Customer]):
    """pk = sk = c#<id>"""
    entity_type = EntityType.CUSTOMER
    model_class = Customer
    key_prefix = KeyPrefix.CUSTOMER


class WarehouseMapper(SelfKeyedMapper[Warehouse]):
    """pk = sk = w#<id>"""
    entity_type = EntityType.WAREHOUSE
    model_class = Warehouse
    key_prefix = KeyPrefix.WAREHOUSE
