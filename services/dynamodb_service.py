"""
DynamoDB service for table operations on records.

Records are converted to attribute maps with utils.documents; key and
expression values with utils.attribute_values.
"""
import boto3
from typing import Any, Dict, List, Optional, Type, TYPE_CHECKING
from botocore.exceptions import ClientError
from logger_config import get_logger
from utils.attribute_values import to_attribute_value, to_expression_attribute_values
from utils.documents import from_attribute_map, from_document, to_attribute_map
from utils.exceptions import ItemAlreadyExistsError

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient
else:
    DynamoDBClient = Any

logger = get_logger(__name__)


def _is_ok(response: Dict[str, Any]) -> bool:
    return response.get('ResponseMetadata', {}).get('HTTPStatusCode') == 200


class DynamoDBService:
    """Service for DynamoDB operations."""

    def __init__(
        self,
        client: Optional[DynamoDBClient] = None,
        region_name: Optional[str] = None
    ) -> None:
        """
        Initialize DynamoDB service.

        Args:
            client: DynamoDB client to own (created lazily when omitted)
            region_name: Region used for the lazily created client
        """
        self._client: Optional[DynamoDBClient] = client
        self.region_name = region_name
        self._closed = False

    @property
    def client(self) -> DynamoDBClient:
        """Lazy initialization of DynamoDB client."""
        if self._closed:
            raise RuntimeError('DynamoDB service is closed')
        if self._client is None:
            self._client = boto3.client('dynamodb', region_name=self.region_name)
        return self._client

    def _key(
        self,
        pk: Any,
        sk: Any,
        key_name: str,
        sort_name: str
    ) -> Dict[str, Dict[str, Any]]:
        key = {key_name: to_attribute_value(pk)}
        if sk is not None:
            key[sort_name] = to_attribute_value(sk)
        return key

    def create_item(
        self,
        table_name: str,
        item: Any,
        key_name: str = 'PK',
        sort_name: str = 'SK'
    ) -> bool:
        """
        Create an item, failing if one with the same key already exists.

        Args:
            table_name: Name of the DynamoDB table
            item: Record (dataclass instance or mapping)
            key_name: Partition key attribute name
            sort_name: Sort key attribute name, checked when the item has it

        Returns:
            True if DynamoDB acknowledged the write

        Raises:
            ItemAlreadyExistsError: If the key is already taken
            ClientError: If DynamoDB operation fails
        """
        attribute_map = to_attribute_map(item)

        condition_expression = f'attribute_not_exists({key_name})'
        if sort_name in attribute_map:
            condition_expression += f' AND attribute_not_exists({sort_name})'

        try:
            response = self.client.put_item(
                TableName=table_name,
                Item=attribute_map,
                ConditionExpression=condition_expression
            )
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', '')
            if error_code == 'ConditionalCheckFailedException':
                raise ItemAlreadyExistsError(
                    f'Item already exists in table {table_name}',
                    table_name=table_name,
                    key=attribute_map.get(key_name)
                ) from e
            logger.error(f'DynamoDB create_item failed for table {table_name}: {str(e)}')
            raise

        logger.info(f'Successfully created item in DynamoDB table {table_name}')
        return _is_ok(response)

    def get_item(
        self,
        table_name: str,
        pk: Any,
        sk: Any = None,
        key_name: str = 'PK',
        sort_name: str = 'SK',
        consistent_read: bool = False,
        item_type: Optional[Type] = None
    ) -> Optional[Any]:
        """
        Get an item from DynamoDB table.

        Args:
            table_name: Name of the DynamoDB table
            pk: Partition key value
            sk: Sort key value, if the table has one
            key_name: Partition key attribute name
            sort_name: Sort key attribute name
            consistent_read: Use a strongly consistent read
            item_type: Record type to rebuild (plain dict when omitted)

        Returns:
            The item if found, None otherwise

        Raises:
            ClientError: If DynamoDB operation fails
        """
        try:
            response = self.client.get_item(
                TableName=table_name,
                Key=self._key(pk, sk, key_name, sort_name),
                ConsistentRead=consistent_read
            )
        except ClientError as e:
            logger.error(f'DynamoDB get_item failed for table {table_name}: {str(e)}')
            raise

        item = response.get('Item')
        if not item:
            return None
        return from_document(from_attribute_map(item), item_type)

    def put_item(
        self,
        table_name: str,
        item: Any
    ) -> bool:
        """
        Put (create or replace) an item into DynamoDB table.

        Raises:
            ClientError: If DynamoDB operation fails
        """
        try:
            response = self.client.put_item(
                TableName=table_name,
                Item=to_attribute_map(item)
            )
        except ClientError as e:
            logger.error(f'DynamoDB put_item failed for table {table_name}: {str(e)}')
            raise

        logger.info(f'Successfully put item to DynamoDB table {table_name}')
        return _is_ok(response)

    def delete_item(
        self,
        table_name: str,
        pk: Any,
        sk: Any = None,
        key_name: str = 'PK',
        sort_name: str = 'SK'
    ) -> bool:
        """
        Delete an item. Deleting a missing item is not an error.

        Raises:
            ClientError: If DynamoDB operation fails
        """
        try:
            response = self.client.delete_item(
                TableName=table_name,
                Key=self._key(pk, sk, key_name, sort_name)
            )
        except ClientError as e:
            logger.error(f'DynamoDB delete_item failed for table {table_name}: {str(e)}')
            raise

        return _is_ok(response)

    def _collect(
        self,
        operation: str,
        item_type: Optional[Type],
        **kwargs
    ) -> List[Any]:
        results = []
        paginator = self.client.get_paginator(operation)
        try:
            for page in paginator.paginate(**kwargs):
                for item in page.get('Items', []):
                    results.append(from_document(from_attribute_map(item), item_type))
        except ClientError as e:
            logger.error(
                f'DynamoDB {operation} failed for table {kwargs.get("TableName")}: {str(e)}'
            )
            raise
        return results

    def scan(
        self,
        table_name: str,
        filter_expression: Optional[str] = None,
        parameters: Any = None,
        item_type: Optional[Type] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None
    ) -> List[Any]:
        """
        Scan the whole table, following pagination.

        Args:
            table_name: Name of the DynamoDB table
            filter_expression: Optional filter expression
            parameters: Values for the expression placeholders (``:name``)
            item_type: Record type to rebuild (plain dicts when omitted)
            expression_attribute_names: Substitutes for attribute names
                in the expressions (``#name``), needed for reserved words

        Raises:
            ClientError: If DynamoDB operation fails
            UnsupportedAttributeTypeError: If a parameter cannot be mapped
        """
        kwargs: Dict[str, Any] = {'TableName': table_name}
        if filter_expression:
            kwargs['FilterExpression'] = filter_expression
        if parameters is not None:
            kwargs['ExpressionAttributeValues'] = to_expression_attribute_values(parameters)
        if expression_attribute_names:
            kwargs['ExpressionAttributeNames'] = dict(expression_attribute_names)

        return self._collect('scan', item_type, **kwargs)

    def query(
        self,
        table_name: str,
        key_condition_expression: str,
        parameters: Any = None,
        filter_expression: Optional[str] = None,
        item_type: Optional[Type] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None
    ) -> List[Any]:
        """
        Query by partition key (and optional sort key condition).

        Raises:
            ClientError: If DynamoDB operation fails
            UnsupportedAttributeTypeError: If a parameter cannot be mapped
        """
        kwargs: Dict[str, Any] = {
            'TableName': table_name,
            'KeyConditionExpression': key_condition_expression,
        }
        if filter_expression:
            kwargs['FilterExpression'] = filter_expression
        if parameters is not None:
            kwargs['ExpressionAttributeValues'] = to_expression_attribute_values(parameters)
        if expression_attribute_names:
            kwargs['ExpressionAttributeNames'] = dict(expression_attribute_names)

        return self._collect('query', item_type, **kwargs)

    def close(self) -> None:
        """Release the client. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._client is not None:
            self._client.close()

    def __enter__(self) -> "DynamoDBService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
