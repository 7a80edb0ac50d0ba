"""DynamoDB utilities and helper functions."""

import os
import boto3
from typing import Any, Dict, List, Optional
from decimal import Decimal
from botocore.exceptions import BotoCoreError, ClientError
import logging

from .exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)


class DynamoDBClient:
    """DynamoDB client wrapper with common operations."""

    def __init__(self, table_name: str):
        """
        Initialize DynamoDB client.

        Args:
            table_name: Name of the DynamoDB table
        """
        self.table_name = table_name

        # Support for LocalStack
        endpoint_url = os.environ.get('LOCALSTACK_ENDPOINT')
        if endpoint_url and os.environ.get('USE_LOCALSTACK', 'false').lower() == 'true':
            self.dynamodb = boto3.resource('dynamodb', endpoint_url=endpoint_url)
        else:
            self.dynamodb = boto3.resource('dynamodb')

        self.table = self.dynamodb.Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put an item in the table.

        Args:
            item: Item to put

        Returns:
            The item that was put

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            item = self._python_to_dynamodb(item)
            self.table.put_item(Item=item)
            return self._dynamodb_to_python(item)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error putting item into {self.table_name}: {e}")
            raise DatabaseError(f"Failed to put item: {str(e)}")

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Get an item from the table.

        Args:
            key: Primary key of the item

        Returns:
            The item if found, None otherwise

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            response = self.table.get_item(Key=key)
            item = response.get('Item')
            if item:
                return self._dynamodb_to_python(item)
            return None
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting item from {self.table_name}: {e}")
            raise DatabaseError(f"Failed to get item: {str(e)}")

    def update_item(
        self,
        key: Dict[str, Any],
        update_expression: str,
        expression_values: Dict[str, Any],
        expression_names: Optional[Dict[str, str]] = None,
        condition_expression: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Update an item in the table.

        Args:
            key: Primary key of the item
            update_expression: Update expression
            expression_values: Expression attribute values
            expression_names: Optional expression attribute names
            condition_expression: Optional condition the stored item must meet

        Returns:
            Updated item

        Raises:
            NotFoundError: If the condition expression does not hold
            DatabaseError: If the operation fails
        """
        try:
            expression_values = self._python_to_dynamodb(expression_values)

            kwargs = {
                'Key': key,
                'UpdateExpression': update_expression,
                'ExpressionAttributeValues': expression_values,
                'ReturnValues': 'ALL_NEW'
            }

            if expression_names:
                kwargs['ExpressionAttributeNames'] = expression_names
            if condition_expression:
                kwargs['ConditionExpression'] = condition_expression

            response = self.table.update_item(**kwargs)
            return self._dynamodb_to_python(response['Attributes'])
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException':
                raise NotFoundError("Item not found")
            logger.error(f"Error updating item in {self.table_name}: {e}")
            raise DatabaseError(f"Failed to update item: {str(e)}")
        except BotoCoreError as e:
            logger.error(f"Error updating item in {self.table_name}: {e}")
            raise DatabaseError(f"Failed to update item: {str(e)}")

    def increment_counter(self, counter_name: str) -> int:
        """
        Atomically increment a named counter and return its new value.

        Args:
            counter_name: Counter partition key (e.g. 'expenses')

        Returns:
            The incremented value

        Raises:
            DatabaseError: If the operation fails
        """
        attributes = self.update_item(
            key={'counter_name': counter_name},
            update_expression="ADD #value :incr",
            expression_values={':incr': 1},
            expression_names={'#value': 'current_value'}
        )
        return int(attributes['current_value'])

    def delete_item(self, key: Dict[str, Any]) -> None:
        """
        Delete an item from the table.

        Args:
            key: Primary key of the item

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            self.table.delete_item(Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error deleting item from {self.table_name}: {e}")
            raise DatabaseError(f"Failed to delete item: {str(e)}")

    def query(
        self,
        key_condition_expression: Any,
        filter_expression: Optional[Any] = None,
        index_name: Optional[str] = None,
        limit: Optional[int] = None,
        scan_forward: bool = True,
        exclusive_start_key: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Query items from the table.

        Args:
            key_condition_expression: Key condition expression
            filter_expression: Optional filter expression
            index_name: Optional index name
            limit: Optional limit
            scan_forward: Sort order (default: True for ascending)
            exclusive_start_key: Optional pagination key

        Returns:
            Dictionary with items and optional LastEvaluatedKey

        Raises:
            DatabaseError: If the operation fails
        """
        try:
            kwargs = {
                'KeyConditionExpression': key_condition_expression,
                'ScanIndexForward': scan_forward
            }

            if filter_expression is not None:
                kwargs['FilterExpression'] = filter_expression
            if index_name:
                kwargs['IndexName'] = index_name
            if limit:
                kwargs['Limit'] = limit
            if exclusive_start_key:
                kwargs['ExclusiveStartKey'] = exclusive_start_key

            response = self.table.query(**kwargs)

            return {
                'items': [self._dynamodb_to_python(item) for item in response.get('Items', [])],
                'last_evaluated_key': response.get('LastEvaluatedKey')
            }
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error querying {self.table_name}: {e}")
            raise DatabaseError(f"Failed to query items: {str(e)}")

    def query_all(
        self,
        key_condition_expression: Any,
        filter_expression: Optional[Any] = None,
        index_name: Optional[str] = None,
        scan_forward: bool = True,
        page_size: int = 100,
        max_items: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Query and follow pagination until the result set is drained.

        Args:
            key_condition_expression: Key condition expression
            filter_expression: Optional filter expression
            index_name: Optional index name
            scan_forward: Sort order (default: True for ascending)
            page_size: Items evaluated per request
            max_items: Stop once at least this many items were collected

        Returns:
            List of items in index order

        Raises:
            DatabaseError: If any page fails
        """
        items = []
        last_key = None

        while True:
            result = self.query(
                key_condition_expression=key_condition_expression,
                filter_expression=filter_expression,
                index_name=index_name,
                limit=page_size,
                scan_forward=scan_forward,
                exclusive_start_key=last_key
            )

            items.extend(result['items'])
            last_key = result.get('last_evaluated_key')

            if not last_key:
                break
            if max_items is not None and len(items) >= max_items:
                break

        return items

    @staticmethod
    def _python_to_dynamodb(obj: Any) -> Any:
        """Convert Python objects to DynamoDB compatible format."""
        if isinstance(obj, dict):
            return {k: DynamoDBClient._python_to_dynamodb(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DynamoDBClient._python_to_dynamodb(item) for item in obj]
        elif isinstance(obj, float):
            return Decimal(str(obj))
        return obj

    @staticmethod
    def _dynamodb_to_python(obj: Any) -> Any:
        """Convert DynamoDB objects to Python format, keeping fractional numbers exact."""
        if isinstance(obj, dict):
            return {k: DynamoDBClient._dynamodb_to_python(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DynamoDBClient._dynamodb_to_python(item) for item in obj]
        elif isinstance(obj, Decimal):
            if obj % 1 == 0:
                return int(obj)
            return obj
        return obj
