"""
Test configuration and fixtures for the order store.

Provides a moto-backed single table with both GSIs, a gateway bound to it and
one fixture per repository.
"""

import boto3
import pytest
from moto import mock_aws

from order_store import (
    CustomerRepository,
    DynamoDBConfig,
    InvoiceRepository,
    OrderRepository,
    ProductRepository,
    ShipmentRepository,
    WarehouseRepository,
    create_table_gateway,
)


@pytest.fixture
def mock_dynamodb_config():
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        table_prefix="",
        table_name="orders"
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def orders_table(mock_dynamodb_resource, mock_dynamodb_config):
    """Create the single table with gsi1 and gsi2."""
    table = mock_dynamodb_resource.create_table(
        TableName=mock_dynamodb_config.get_table_name(),
        KeySchema=[
            {'AttributeName': 'pk', 'KeyType': 'HASH'},
            {'AttributeName': 'sk', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'pk', 'AttributeType': 'S'},
            {'AttributeName': 'sk', 'AttributeType': 'S'},
            {'AttributeName': 'gsi1_pk', 'AttributeType': 'S'},
            {'AttributeName': 'gsi1_sk', 'AttributeType': 'S'},
            {'AttributeName': 'gsi2_pk', 'AttributeType': 'S'},
            {'AttributeName': 'gsi2_sk', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'gsi1',
                'KeySchema': [
                    {'AttributeName': 'gsi1_pk', 'KeyType': 'HASH'},
                    {'AttributeName': 'gsi1_sk', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'},
                'ProvisionedThroughput': {'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}
            },
            {
                'IndexName': 'gsi2',
                'KeySchema': [
                    {'AttributeName': 'gsi2_pk', 'KeyType': 'HASH'},
                    {'AttributeName': 'gsi2_sk', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'},
                'ProvisionedThroughput': {'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}
            }
        ],
        BillingMode='PROVISIONED',
        ProvisionedThroughput={'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}
    )
    return table


@pytest.fixture
def gateway(mock_dynamodb_config, orders_table):
    """TableGateway bound to the mocked single table."""
    return create_table_gateway(mock_dynamodb_config)


# Repository Fixtures

@pytest.fixture
def product_repository(gateway):
    return ProductRepository(gateway)


@pytest.fixture
def customer_repository(gateway):
    return CustomerRepository(gateway)


@pytest.fixture
def warehouse_repository(gateway):
    return WarehouseRepository(gateway)


@pytest.fixture
def order_repository(gateway):
    return OrderRepository(gateway)


@pytest.fixture
def invoice_repository(gateway):
    return InvoiceRepository(gateway)


@pytest.fixture
def shipment_repository(gateway):
    return ShipmentRepository(gateway)


# Sample Data Fixtures

@pytest.fixture
def timestamps():
    """Three strictly increasing canonical timestamps."""
    return (
        "2024-01-01T10:00:00.000Z",
        "2024-01-02T10:00:00.000Z",
        "2024-01-03T10:00:00.000Z",
    )
