"""
DynamoDB utility functions for data access.
"""
import os
from typing import Dict, List, Optional, Any
import boto3
from boto3.dynamodb.conditions import Key

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create singleton DynamoDB client instance.

    All entry and settings access goes through this client so table
    configuration is resolved in one place.

    Example:
        dynamo = get_dynamo()
        item = dynamo.get_item({"PK": create_pk("123"), "SK": create_settings_sk()})

    Returns:
        DynamoDBClient: Singleton instance of DynamoDB client

    Raises:
        EnvironmentError: If TRACKER_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['TRACKER_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "TRACKER_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Client for interacting with DynamoDB table."""

    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put a single item into the table, replacing any item with the same key.

        Args:
            item: Dictionary containing item attributes

        Returns:
            Response from DynamoDB
        """
        return self.table.put_item(Item=item)

    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Get a single item from the table.

        Args:
            key: Dictionary containing partition key and sort key

        Returns:
            Item if found, None otherwise
        """
        response = self.table.get_item(Key=key)
        return response.get('Item')

    def query_items(
        self,
        partition_key: str,
        partition_value: str,
        sort_key_condition: Optional[Key] = None
    ) -> List[Dict[str, Any]]:
        """
        Query items using partition key and optional sort key condition.

        Follows LastEvaluatedKey so users with long histories get every item.

        Args:
            partition_key: Name of partition key
            partition_value: Value of partition key
            sort_key_condition: Optional sort key condition

        Returns:
            List of matching items
        """
        key_condition = Key(partition_key).eq(partition_value)
        if sort_key_condition is not None:
            key_condition = key_condition & sort_key_condition

        kwargs = {"KeyConditionExpression": key_condition}
        items = []
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def delete_item(self, key: Dict[str, str]) -> Dict[str, Any]:
        """
        Delete an item from the table.

        Args:
            key: Dictionary containing partition key and sort key

        Returns:
            Response from DynamoDB
        """
        return self.table.delete_item(Key=key)

ENTRY_SK_PREFIX = "ENTRY#"

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

def create_entry_sk(date_str: str) -> str:
    """
    Create sort key for a daily entry.

    Keying on the date makes a second save for the same day overwrite the first.

    Args:
        date_str: ISO format date string (YYYY-MM-DD)

    Returns:
        Sort key in format "ENTRY#{date_str}"
    """
    return f"{ENTRY_SK_PREFIX}{date_str}"

def create_settings_sk() -> str:
    """Create sort key for the manual cycle settings record."""
    return "SETTINGS#cycleStats"

def create_partner_sk() -> str:
    """Create sort key for the partner sharing record."""
    return "SETTINGS#partner"
