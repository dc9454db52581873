"""
Entry storage service.

This module is the data-access side the analyzer consumes: it reads a user's
entries, manual cycle settings and partner email from DynamoDB and writes them back.

Typical usage:
    repository = EntryRepository()
    entries = repository.get_entries(user_id)
    override = repository.get_manual_override(user_id)
"""
from datetime import date
from typing import Any, Dict, List, Optional

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key

from src.models.cycle import ManualOverride
from src.models.entry import Entry
from src.services.exceptions import EntryRepositoryError
from src.services.settings import validate_manual_override, validate_partner_email
from src.utils.dynamo import (
    ENTRY_SK_PREFIX,
    create_entry_sk,
    create_partner_sk,
    create_pk,
    create_settings_sk,
    get_dynamo
)

logger = Logger()

_KEY_ATTRIBUTES = ("PK", "SK")

def _to_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None

class EntryRepository:
    """Service for reading and writing a user's daily entries and cycle settings."""

    def __init__(self):
        """Initialize entry repository."""
        self.dynamo = get_dynamo()

    def get_entries(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Get all entries for a user.

        Records are returned as stored, without validation, so the analyzer
        can skip malformed ones individually.

        Args:
            user_id: User identifier

        Returns:
            List of raw entry records, in storage order

        Raises:
            EntryRepositoryError: If the table cannot be queried
        """
        try:
            items = self.dynamo.query_items(
                partition_key="PK",
                partition_value=create_pk(user_id),
                sort_key_condition=Key("SK").begins_with(ENTRY_SK_PREFIX)
            )
        except Exception as e:
            logger.error("Error retrieving entries", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise EntryRepositoryError(f"Failed to retrieve entries: {str(e)}")

        entries = [
            {k: v for k, v in item.items() if k not in _KEY_ATTRIBUTES}
            for item in items
        ]
        logger.info("Retrieved entries", extra={"user_id": user_id, "count": len(entries)})
        return entries

    def save_entry(self, user_id: str, entry: Entry) -> None:
        """
        Save an entry, replacing any existing entry for the same date.

        Args:
            user_id: User identifier
            entry: Validated entry

        Raises:
            EntryRepositoryError: If the item cannot be written
        """
        date_str = entry.date.isoformat()
        item = {
            "PK": create_pk(user_id),
            "SK": create_entry_sk(date_str),
            **entry.model_dump(mode="json", exclude_none=True)
        }
        try:
            self.dynamo.put_item(item)
        except Exception as e:
            logger.error("Error saving entry", extra={
                "user_id": user_id,
                "date": date_str,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise EntryRepositoryError(f"Failed to save entry: {str(e)}")

        logger.info("Saved entry", extra={"user_id": user_id, "date": date_str})

    def delete_entry(self, user_id: str, entry_date: date) -> None:
        """
        Delete the entry logged for a date.

        Args:
            user_id: User identifier
            entry_date: Date of the entry to delete

        Raises:
            EntryRepositoryError: If the item cannot be deleted
        """
        try:
            self.dynamo.delete_item({
                "PK": create_pk(user_id),
                "SK": create_entry_sk(entry_date.isoformat())
            })
        except Exception as e:
            logger.error("Error deleting entry", extra={
                "user_id": user_id,
                "date": entry_date.isoformat(),
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise EntryRepositoryError(f"Failed to delete entry: {str(e)}")

    def get_manual_override(self, user_id: str) -> Optional[ManualOverride]:
        """
        Get the user's manual cycle averages.

        Args:
            user_id: User identifier

        Returns:
            ManualOverride if both values are stored, None otherwise

        Raises:
            EntryRepositoryError: If the table cannot be read
        """
        try:
            item = self.dynamo.get_item({
                "PK": create_pk(user_id),
                "SK": create_settings_sk()
            })
        except Exception as e:
            logger.error("Error retrieving cycle settings", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise EntryRepositoryError(f"Failed to retrieve cycle settings: {str(e)}")

        if not item:
            return None

        # Numbers come back from DynamoDB as Decimal
        override = ManualOverride(
            avg_cycle_length=_to_int(item.get("avg_cycle_length")),
            avg_period_duration=_to_int(item.get("avg_period_duration"))
        )
        return override if override.is_complete else None

    def save_manual_override(
        self,
        user_id: str,
        avg_cycle_length: Any,
        avg_period_duration: Any
    ) -> ManualOverride:
        """
        Validate and store manual cycle averages.

        Args:
            user_id: User identifier
            avg_cycle_length: Average cycle length entered by the user
            avg_period_duration: Average period duration entered by the user

        Returns:
            The stored ManualOverride

        Raises:
            InvalidManualOverrideError: If the values fail validation
            EntryRepositoryError: If the item cannot be written
        """
        override = validate_manual_override(avg_cycle_length, avg_period_duration)
        try:
            self.dynamo.put_item({
                "PK": create_pk(user_id),
                "SK": create_settings_sk(),
                "avg_cycle_length": override.avg_cycle_length,
                "avg_period_duration": override.avg_period_duration
            })
        except Exception as e:
            logger.error("Error saving cycle settings", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise EntryRepositoryError(f"Failed to save cycle settings: {str(e)}")

        logger.info("Saved cycle settings", extra={"user_id": user_id})
        return override

    def get_partner_email(self, user_id: str) -> Optional[str]:
        """
        Get the email address of the partner the user shares with.

        Args:
            user_id: User identifier

        Returns:
            Stored address, None if the user has not set one

        Raises:
            EntryRepositoryError: If the table cannot be read
        """
        try:
            item = self.dynamo.get_item({
                "PK": create_pk(user_id),
                "SK": create_partner_sk()
            })
        except Exception as e:
            logger.error("Error retrieving partner settings", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise EntryRepositoryError(f"Failed to retrieve partner settings: {str(e)}")

        return (item or {}).get("email") or None

    def save_partner_email(self, user_id: str, email: Any) -> str:
        """
        Validate and store the partner's email address.

        Args:
            user_id: User identifier
            email: Address entered by the user

        Returns:
            The stored address

        Raises:
            InvalidPartnerEmailError: If the address is malformed
            EntryRepositoryError: If the item cannot be written
        """
        address = validate_partner_email(email)
        try:
            self.dynamo.put_item({
                "PK": create_pk(user_id),
                "SK": create_partner_sk(),
                "email": address
            })
        except Exception as e:
            logger.error("Error saving partner settings", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise EntryRepositoryError(f"Failed to save partner settings: {str(e)}")

        logger.info("Saved partner settings", extra={"user_id": user_id})
        return address
