"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class StatisticsError(Exception):
    """Base exception for cycle analysis errors."""
    pass

class InvalidManualOverrideError(StatisticsError):
    """Raised when user-entered cycle averages are outside accepted bounds."""
    pass

class EntryRepositoryError(Exception):
    """Raised when entries or settings cannot be read from or written to storage."""
    pass

class InvalidPartnerEmailError(Exception):
    """Raised when a partner email address is missing or malformed."""
    pass
