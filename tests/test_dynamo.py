"""
Tests for DynamoDB utilities.
"""
import pytest
from unittest.mock import Mock, patch

from src.utils import dynamo
from src.utils.dynamo import (
    DynamoDBClient,
    create_entry_sk,
    create_partner_sk,
    create_pk,
    create_settings_sk
)

def test_key_builders():
    """Test partition and sort key formats."""
    assert create_pk("123") == "USER#123"
    assert create_entry_sk("2024-01-05") == "ENTRY#2024-01-05"
    assert create_settings_sk() == "SETTINGS#cycleStats"
    assert create_partner_sk() == "SETTINGS#partner"

def test_get_dynamo_requires_table_name(monkeypatch):
    """Test that a missing table name is reported clearly."""
    monkeypatch.delenv("TRACKER_TABLE_NAME", raising=False)
    monkeypatch.setattr(dynamo, "_dynamo_instance", None)

    with pytest.raises(EnvironmentError, match="TRACKER_TABLE_NAME"):
        dynamo.get_dynamo()

def test_query_items_follows_pagination():
    """Test that every page of a query is collected."""
    with patch("src.utils.dynamo.boto3") as mock_boto3:
        table = Mock()
        mock_boto3.resource.return_value.Table.return_value = table
        table.query.side_effect = [
            {"Items": [{"SK": "ENTRY#2024-01-01"}], "LastEvaluatedKey": {"SK": "ENTRY#2024-01-01"}},
            {"Items": [{"SK": "ENTRY#2024-01-02"}]},
        ]

        items = DynamoDBClient("TrackerTable-test").query_items("PK", "USER#123")

    assert [item["SK"] for item in items] == ["ENTRY#2024-01-01", "ENTRY#2024-01-02"]
    assert table.query.call_count == 2
    assert table.query.call_args_list[1].kwargs["ExclusiveStartKey"] == {"SK": "ENTRY#2024-01-01"}
