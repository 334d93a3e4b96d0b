"""
Thin DynamoDB Table Gateway

This module provides the store client every repository is built on: a
lightweight wrapper around a boto3 DynamoDB Table resource for the single
table that holds all entity types.

The gateway:
- Creates the boto3 session, resource and Table handle lazily
- Exposes get/put/query/delete/scan with pagination handled for reads
- Wraps transactional writes and surfaces per-item cancellation reasons
- Truncates the table for maintenance (test teardown)

Errors raised by botocore are logged and re-raised unchanged. The gateway
adds no retry logic of its own beyond botocore's configured retries, and it
performs no conditional checks: puts are unconditional, last writer wins.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import DynamoDBConfig
from ..exceptions import ConnectionError, TransactionCancelledError
from ..keys import PK, SK

logger = logging.getLogger(__name__)


def _describe_key(item: Dict[str, Any]) -> str:
    return f"pk={item.get(PK)!r} sk={item.get(SK)!r}"


class TableGateway:
    """
    Thin gateway for single-table DynamoDB operations.

    Designed to be injected into repositories rather than used directly by
    clients. One gateway per table; the boto3 resource it creates is reused
    for every call.
    """

    def __init__(self, config: DynamoDBConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: DynamoDB configuration
            table_name: Name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

    def _client_config(self) -> Config:
        return Config(
            region_name=self.config.region_name,
            retries={'max_attempts': self.config.retries},
            max_pool_connections=self.config.max_pool_connections,
            connect_timeout=self.config.timeout_seconds,
            read_timeout=self.config.timeout_seconds
        )

    @property
    def dynamodb(self):
        """boto3 DynamoDB service resource, created on first use."""
        if self._dynamodb is not None:
            return self._dynamodb
        try:
            session = boto3.Session(
                aws_access_key_id=self.config.aws_access_key_id,
                aws_secret_access_key=self.config.aws_secret_access_key,
                region_name=self.config.region_name
            )
            self._dynamodb = session.resource(
                'dynamodb',
                region_name=self.config.region_name,
                endpoint_url=self.config.endpoint_url,
                config=self._client_config()
            )
        except Exception as e:
            logger.error(f"Could not create DynamoDB resource for {self.table_name}: {e}")
            raise ConnectionError(
                f"Failed to connect to DynamoDB: {e}", e,
                context={'region': self.config.region_name, 'endpoint_url': self.config.endpoint_url}
            ) from e
        return self._dynamodb

    @property
    def table(self):
        """boto3 Table handle for the single table."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Could not open table {self.table_name}: {e}")
                raise ConnectionError(f"Failed to access table {self.table_name!r}: {e}", e) from e
        return self._table

    @property
    def client(self):
        """Low-level client behind the resource (thread-safe, accepts native Python types)."""
        return self.dynamodb.meta.client

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Fetch a single record by its full primary key.

        Returns:
            The stored record, or None when no record has that key
        """
        try:
            response = self.table.get_item(Key=key)
        except ClientError as e:
            logger.error(f"GetItem on {self.table_name} failed for {_describe_key(key)}: {e}")
            raise
        return response.get('Item')

    def put_item(self, item: Dict[str, Any]) -> None:
        """
        Write a record, replacing any record with the same key.

        Example:
            gateway.put_item({'pk': 'p#1', 'sk': 'p#1', 'entityType': 'product', 'name': 'Tea'})
        """
        try:
            self.table.put_item(Item=item)
        except ClientError as e:
            logger.error(f"PutItem on {self.table_name} failed for {_describe_key(item)}: {e}")
            raise
        logger.info(f"Put item in {self.table_name}: {_describe_key(item)}")

    def delete_item(self, key: Dict[str, Any]) -> None:
        """Delete a record by its full primary key. Deleting a missing key is not an error."""
        try:
            self.client.delete_item(TableName=self.table_name, Key=key)
        except ClientError as e:
            logger.error(f"DeleteItem on {self.table_name} failed for {_describe_key(key)}: {e}")
            raise
        logger.info(f"Deleted item from {self.table_name}: {_describe_key(key)}")

    def query(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Execute a DynamoDB Query and return every matching record.

        Raw pass-through of boto3 query parameters. Follows LastEvaluatedKey
        until the result set is exhausted, preserving the store's order
        (ascending sort key unless ScanIndexForward=False is passed).

        Example:
            items = gateway.query(
                IndexName='gsi1',
                KeyConditionExpression=Key('gsi1_pk').eq('p#42') & Key('gsi1_sk').between(start, end)
            )
        """
        items: List[Dict[str, Any]] = []
        query_kwargs = dict(kwargs)
        try:
            response = self.table.query(**query_kwargs)
            items.extend(response.get('Items', []))

            # Handle pagination
            while 'LastEvaluatedKey' in response:
                query_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']
                response = self.table.query(**query_kwargs)
                items.extend(response.get('Items', []))
        except ClientError as e:
            logger.error(f"Query on {self.table_name} failed: {e}")
            raise

        logger.debug(f"Query on {self.table_name} returned {len(items)} items")
        return items

    def scan(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Execute a full-table Scan and return every record.

        Only meant for maintenance such as truncate(); access patterns must
        go through query().
        """
        items: List[Dict[str, Any]] = []
        scan_kwargs = dict(kwargs)
        try:
            response = self.table.scan(**scan_kwargs)
            items.extend(response.get('Items', []))

            while 'LastEvaluatedKey' in response:
                scan_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']
                response = self.table.scan(**scan_kwargs)
                items.extend(response.get('Items', []))
        except ClientError as e:
            logger.error(f"Scan on {self.table_name} failed: {e}")
            raise

        logger.info(f"Scanned {len(items)} items from {self.table_name}")
        return items

    def put_transact_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Build a Put entry for transact_write_items()."""
        return {'Put': {'TableName': self.table_name, 'Item': item}}

    def delete_transact_item(self, key: Dict[str, Any]) -> Dict[str, Any]:
        """Build a Delete entry for transact_write_items()."""
        return {'Delete': {'TableName': self.table_name, 'Key': key}}

    def transact_write_items(self, transact_items: List[Dict[str, Any]]) -> None:
        """
        Execute an all-or-nothing write of several records.

        Args:
            transact_items: Put/Delete entries, see put_transact_item() and
                delete_transact_item()

        Raises:
            TransactionCancelledError: DynamoDB rejected the transaction; the
                error carries one cancellation reason per item
            ClientError: any other failure, unchanged
        """
        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            error = e.response.get('Error', {})
            if error.get('Code') != 'TransactionCanceledException':
                logger.error(f"TransactWriteItems on {self.table_name} failed: {e}")
                raise

            reasons = e.response.get('CancellationReasons') or error.get('CancellationReasons') or []
            logger.error(
                f"Transaction on {self.table_name} cancelled: "
                f"{[reason.get('Code') for reason in reasons]}"
            )
            raise TransactionCancelledError(
                f"Transaction cancelled on {self.table_name}: {error.get('Message', '')}",
                cancellation_reasons=reasons,
                original_error=e
            ) from e
        logger.info(f"Transaction of {len(transact_items)} items completed on {self.table_name}")

    def truncate(self) -> int:
        """
        Delete every record in the table.

        Scans the table, then issues all deletes concurrently and waits for
        them to finish. The first failed delete is re-raised once every
        request has completed; deletes that already succeeded are not rolled
        back.

        Returns:
            Number of deleted records
        """
        keys = [{PK: item[PK], SK: item[SK]} for item in self.scan(ProjectionExpression='pk, sk')]
        if not keys:
            return 0

        with ThreadPoolExecutor(max_workers=self.config.max_pool_connections) as executor:
            futures = [executor.submit(self.delete_item, key) for key in keys]
        for future in futures:
            future.result()

        logger.info(f"Truncated {self.table_name}: deleted {len(keys)} items")
        return len(keys)


def create_table_gateway(config: DynamoDBConfig, table_name: Optional[str] = None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: DynamoDB configuration
        table_name: Base table name (defaults to config.table_name)

    Returns:
        Configured TableGateway instance
    """
    if config.enable_debug_logging:
        logging.getLogger('order_store').setLevel(logging.DEBUG)

    # Use config to get properly prefixed table name
    full_table_name = config.get_table_name(table_name)
    return TableGateway(config, full_table_name)
