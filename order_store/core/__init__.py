"""
Core infrastructure components for DynamoDB operations.

- TableGateway: store client wrapping the boto3 Table of the single table
- create_table_gateway: factory building a gateway from configuration
"""

from .table_gateway import TableGateway, create_table_gateway

__all__ = [
    "TableGateway",
    "create_table_gateway",
]
