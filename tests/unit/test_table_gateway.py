"""
Tests for TableGateway (core/table_gateway.py)

These tests verify the thin store client every repository is built on,
against mocked boto3 resources.
"""

import logging
from unittest.mock import Mock, call, patch

import pytest
from botocore.exceptions import ClientError

from order_store.config import DynamoDBConfig
from order_store.core.table_gateway import TableGateway, create_table_gateway
from order_store.exceptions import ConnectionError, TransactionCancelledError


@pytest.fixture
def mock_config():
    """Mock configuration for testing."""
    return DynamoDBConfig(
        region_name="us-east-1",
        table_prefix="test",
        environment="dev",
        aws_access_key_id="fake_key",
        aws_secret_access_key="fake_secret",
        table_name="orders",
        max_pool_connections=4
    )


@pytest.fixture
def mock_table():
    """Mock DynamoDB table resource."""
    table = Mock()
    table.get_item.return_value = {}
    table.query.return_value = {'Items': []}
    table.scan.return_value = {'Items': []}
    table.put_item.return_value = None
    return table


@pytest.fixture
def mock_dynamodb():
    """Mock DynamoDB service resource with a low-level client."""
    dynamodb = Mock()
    dynamodb.meta.client = Mock()
    return dynamodb


def _client_error(code, operation_name, **extra):
    return ClientError(
        error_response={'Error': {'Code': code, 'Message': 'Test error'}, **extra},
        operation_name=operation_name
    )


class TestTableGatewaySetup:
    """Test lazy resource creation."""

    def test_initialization(self, mock_config):
        gateway = TableGateway(mock_config, "test_table")

        assert gateway.config == mock_config
        assert gateway.table_name == "test_table"
        assert gateway._dynamodb is None
        assert gateway._table is None

    def test_dynamodb_property_reuses_instance(self, mock_config):
        """Test that DynamoDB resource is created once and reused."""
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_dynamodb = Mock()
            mock_session_class.return_value = mock_session
            mock_session.resource.return_value = mock_dynamodb

            gateway = TableGateway(mock_config, "test_table")

            assert gateway.dynamodb is gateway.dynamodb is mock_dynamodb
            mock_session_class.assert_called_once()
            mock_session.resource.assert_called_once()

    def test_endpoint_url_is_passed_to_resource(self, mock_config):
        mock_config.endpoint_url = "http://localhost:8000"

        with patch('boto3.Session') as mock_session_class:
            gateway = TableGateway(mock_config, "test_table")
            _ = gateway.dynamodb

            _, kwargs = mock_session_class.return_value.resource.call_args
            assert kwargs['endpoint_url'] == "http://localhost:8000"
            assert kwargs['region_name'] == "us-east-1"

    def test_dynamodb_connection_error(self, mock_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session_class.side_effect = Exception("Connection failed")

            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(ConnectionError, match="Failed to connect to DynamoDB"):
                _ = gateway.dynamodb

    def test_table_access_error(self, mock_config, mock_dynamodb):
        mock_dynamodb.Table.side_effect = Exception("Table access failed")

        with patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(ConnectionError, match="Failed to access table"):
                _ = gateway.table

    def test_factory_uses_prefixed_table_name(self, mock_config):
        gateway = create_table_gateway(mock_config)

        assert isinstance(gateway, TableGateway)
        assert gateway.table_name == "test_dev_orders"

    def test_factory_enables_debug_logging(self, mock_config):
        mock_config.enable_debug_logging = True
        package_logger = logging.getLogger('order_store')
        previous_level = package_logger.level

        try:
            create_table_gateway(mock_config)
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(previous_level)


class TestTableGatewayReads:

    def test_get_item_returns_item(self, mock_config, mock_table):
        mock_table.get_item.return_value = {'Item': {'pk': 'p#1', 'sk': 'p#1'}}

        with patch.object(TableGateway, 'table', mock_table):
            gateway = TableGateway(mock_config, "test_table")

            result = gateway.get_item({'pk': 'p#1', 'sk': 'p#1'})

            mock_table.get_item.assert_called_once_with(Key={'pk': 'p#1', 'sk': 'p#1'})
            assert result == {'pk': 'p#1', 'sk': 'p#1'}

    def test_get_item_missing_returns_none(self, mock_config, mock_table):
        with patch.object(TableGateway, 'table', mock_table):
            gateway = TableGateway(mock_config, "test_table")

            assert gateway.get_item({'pk': 'p#1', 'sk': 'p#1'}) is None

    def test_query_follows_pagination(self, mock_config, mock_table):
        """Every page is fetched and concatenated in order."""
        mock_table.query.side_effect = [
            {'Items': [{'n': 1}, {'n': 2}], 'LastEvaluatedKey': {'pk': 'a', 'sk': 'b'}},
            {'Items': [{'n': 3}], 'LastEvaluatedKey': {'pk': 'a', 'sk': 'c'}},
            {'Items': [{'n': 4}]},
        ]

        with patch.object(TableGateway, 'table', mock_table):
            gateway = TableGateway(mock_config, "test_table")

            result = gateway.query(IndexName='gsi1', KeyConditionExpression='cond')

            assert result == [{'n': 1}, {'n': 2}, {'n': 3}, {'n': 4}]
            assert mock_table.query.call_count == 3
            mock_table.query.assert_called_with(
                IndexName='gsi1',
                KeyConditionExpression='cond',
                ExclusiveStartKey={'pk': 'a', 'sk': 'c'}
            )

    def test_query_client_error_propagates_unchanged(self, mock_config, mock_table):
        mock_error = _client_error('ProvisionedThroughputExceededException', 'Query')
        mock_table.query.side_effect = mock_error

        with patch.object(TableGateway, 'table', mock_table):
            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(ClientError) as exc_info:
                gateway.query(KeyConditionExpression='cond')

            assert exc_info.value is mock_error

    def test_scan_follows_pagination(self, mock_config, mock_table):
        mock_table.scan.side_effect = [
            {'Items': [{'n': 1}], 'LastEvaluatedKey': {'pk': 'a', 'sk': 'b'}},
            {'Items': [{'n': 2}]},
        ]

        with patch.object(TableGateway, 'table', mock_table):
            gateway = TableGateway(mock_config, "test_table")

            assert gateway.scan() == [{'n': 1}, {'n': 2}]


class TestTableGatewayWrites:

    def test_put_item(self, mock_config, mock_table):
        with patch.object(TableGateway, 'table', mock_table):
            gateway = TableGateway(mock_config, "test_table")
            item = {'pk': 'p#1', 'sk': 'p#1', 'entityType': 'product'}

            gateway.put_item(item)

            mock_table.put_item.assert_called_once_with(Item=item)

    def test_put_item_client_error_propagates_unchanged(self, mock_config, mock_table):
        mock_error = _client_error('ValidationException', 'PutItem')
        mock_table.put_item.side_effect = mock_error

        with patch.object(TableGateway, 'table', mock_table):
            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(ClientError) as exc_info:
                gateway.put_item({'pk': 'p#1', 'sk': 'p#1'})

            assert exc_info.value is mock_error

    def test_delete_item_uses_client(self, mock_config, mock_dynamodb):
        with patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")

            gateway.delete_item({'pk': 'p#1', 'sk': 'p#1'})

            mock_dynamodb.meta.client.delete_item.assert_called_once_with(
                TableName="test_table",
                Key={'pk': 'p#1', 'sk': 'p#1'}
            )


class TestTableGatewayTransactions:

    def test_transact_item_builders(self, mock_config):
        gateway = TableGateway(mock_config, "test_table")

        assert gateway.put_transact_item({'pk': 'a', 'sk': 'b'}) == {
            'Put': {'TableName': 'test_table', 'Item': {'pk': 'a', 'sk': 'b'}}
        }
        assert gateway.delete_transact_item({'pk': 'a', 'sk': 'b'}) == {
            'Delete': {'TableName': 'test_table', 'Key': {'pk': 'a', 'sk': 'b'}}
        }

    def test_transact_write_items(self, mock_config, mock_dynamodb):
        with patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")
            transact_items = [gateway.put_transact_item({'pk': 'o#1', 'sk': 'c#1'})]

            gateway.transact_write_items(transact_items)

            mock_dynamodb.meta.client.transact_write_items.assert_called_once_with(
                TransactItems=transact_items
            )

    def test_cancelled_transaction_carries_reasons(self, mock_config, mock_dynamodb):
        reasons = [
            {'Code': 'None'},
            {'Code': 'ConditionalCheckFailed', 'Message': 'The conditional request failed'},
        ]
        mock_error = _client_error('TransactionCanceledException', 'TransactWriteItems', CancellationReasons=reasons)
        mock_dynamodb.meta.client.transact_write_items.side_effect = mock_error

        with patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(TransactionCancelledError) as exc_info:
                gateway.transact_write_items([{'Put': {}}, {'Put': {}}])

            error = exc_info.value
            assert error.cancellation_reasons == reasons
            assert error.failed_items == [1]
            assert error.original_error is mock_error
            assert error.context['cancellation_codes'] == ['None', 'ConditionalCheckFailed']

    def test_other_transaction_errors_propagate_unchanged(self, mock_config, mock_dynamodb):
        mock_error = _client_error('TransactionConflictException', 'TransactWriteItems')
        mock_dynamodb.meta.client.transact_write_items.side_effect = mock_error

        with patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(ClientError) as exc_info:
                gateway.transact_write_items([])

            assert exc_info.value is mock_error


class TestTruncate:

    def test_truncate_empty_table(self, mock_config, mock_table, mock_dynamodb):
        with patch.object(TableGateway, 'table', mock_table), \
                patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")

            assert gateway.truncate() == 0
            mock_dynamodb.meta.client.delete_item.assert_not_called()

    def test_truncate_deletes_every_record(self, mock_config, mock_table, mock_dynamodb):
        keys = [{'pk': f'p#{n}', 'sk': f'p#{n}'} for n in range(10)]
        mock_table.scan.return_value = {'Items': keys}

        with patch.object(TableGateway, 'table', mock_table), \
                patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")

            assert gateway.truncate() == 10

            mock_table.scan.assert_called_once_with(ProjectionExpression='pk, sk')
            client = mock_dynamodb.meta.client
            assert client.delete_item.call_count == 10
            client.delete_item.assert_has_calls(
                [call(TableName="test_table", Key=key) for key in keys],
                any_order=True
            )

    def test_truncate_waits_for_all_deletes_then_raises(self, mock_config, mock_table, mock_dynamodb):
        keys = [{'pk': f'p#{n}', 'sk': f'p#{n}'} for n in range(3)]
        mock_table.scan.return_value = {'Items': keys}
        mock_error = _client_error('ProvisionedThroughputExceededException', 'DeleteItem')

        def delete_item(TableName, Key):
            if Key['pk'] == 'p#1':
                raise mock_error

        mock_dynamodb.meta.client.delete_item.side_effect = delete_item

        with patch.object(TableGateway, 'table', mock_table), \
                patch.object(TableGateway, 'dynamodb', mock_dynamodb):
            gateway = TableGateway(mock_config, "test_table")

            with pytest.raises(ClientError) as exc_info:
                gateway.truncate()

            assert exc_info.value is mock_error
            assert mock_dynamodb.meta.client.delete_item.call_count == 3
