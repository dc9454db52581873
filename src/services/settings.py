"""
Validation for user-entered cycle settings.

Bounds are enforced here, where the user saves the values; the analyzer
itself accepts any positive override.
"""
import re
from typing import Any, Optional

from aws_lambda_powertools import Logger

from src.models.cycle import ManualOverride
from src.services.constants import MIN_MANUAL_CYCLE_LENGTH, MAX_MANUAL_CYCLE_LENGTH
from src.services.exceptions import InvalidManualOverrideError, InvalidPartnerEmailError

logger = Logger()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

def _as_positive_int(name: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidManualOverrideError(f"{name} must be a whole number of days")
    if number <= 0 or number != float(value):
        raise InvalidManualOverrideError(f"{name} must be a whole number of days")
    return number

def validate_manual_override(
    avg_cycle_length: Optional[Any],
    avg_period_duration: Optional[Any]
) -> ManualOverride:
    """
    Validate manual cycle settings before they are stored.

    Args:
        avg_cycle_length: Average cycle length entered by the user
        avg_period_duration: Average period duration entered by the user

    Returns:
        ManualOverride ready to be persisted

    Raises:
        InvalidManualOverrideError: If a value is missing, not a positive whole
            number, the cycle length is outside 21-35 days, or the period is
            longer than the cycle
    """
    if avg_cycle_length in (None, "") or avg_period_duration in (None, ""):
        raise InvalidManualOverrideError("Both cycle length and period duration are required")

    cycle_length = _as_positive_int("Cycle length", avg_cycle_length)
    period_duration = _as_positive_int("Period duration", avg_period_duration)

    if not MIN_MANUAL_CYCLE_LENGTH <= cycle_length <= MAX_MANUAL_CYCLE_LENGTH:
        logger.warning("Rejected manual cycle length", extra={"avg_cycle_length": cycle_length})
        raise InvalidManualOverrideError(
            f"Cycle length should be between {MIN_MANUAL_CYCLE_LENGTH}-{MAX_MANUAL_CYCLE_LENGTH} days"
        )
    if period_duration > cycle_length:
        raise InvalidManualOverrideError("Period duration must not be longer than the cycle length")

    return ManualOverride(avg_cycle_length=cycle_length, avg_period_duration=period_duration)

def validate_partner_email(email: Optional[Any]) -> str:
    """
    Validate the email address of the partner a user shares with.

    Args:
        email: Address entered by the user

    Returns:
        The address with surrounding whitespace removed

    Raises:
        InvalidPartnerEmailError: If the address is missing or malformed
    """
    address = email.strip() if isinstance(email, str) else ""
    if not EMAIL_PATTERN.match(address):
        raise InvalidPartnerEmailError("Please enter a valid email address")
    return address
